from rest_framework import serializers

from .services import ORDER_STATUSES, PAYMENT_METHODS


class ShippingSerializer(serializers.Serializer):
    """
    Serializer for checkout shipping details
    """
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    postal_code = serializers.CharField(max_length=20)
    country = serializers.CharField(max_length=100)
    payment_method = serializers.ChoiceField(choices=PAYMENT_METHODS, default='credit')


class OrderItemSerializer(serializers.Serializer):
    id = serializers.CharField(allow_blank=True)
    name = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    image = serializers.CharField(allow_blank=True)


class OrderCustomerSerializer(serializers.Serializer):
    id = serializers.CharField(allow_blank=True)
    name = serializers.CharField(allow_blank=True)
    email = serializers.CharField(allow_blank=True)


class OrderAddressSerializer(serializers.Serializer):
    street = serializers.CharField(allow_blank=True)
    city = serializers.CharField(allow_blank=True)
    zip = serializers.CharField(allow_blank=True)
    country = serializers.CharField(allow_blank=True)


class OrderSerializer(serializers.Serializer):
    """
    Serializer for the admin order view
    """
    id = serializers.CharField()
    customer = OrderCustomerSerializer()
    date = serializers.CharField(allow_null=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()
    is_paid = serializers.BooleanField()
    is_delivered = serializers.BooleanField()
    payment_method = serializers.CharField(allow_blank=True)
    items = OrderItemSerializer(many=True)
    shipping_address = OrderAddressSerializer()


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ORDER_STATUSES)
