from rest_framework import serializers


class CartItemSerializer(serializers.Serializer):
    """
    Serializer for cart entries
    """
    id = serializers.CharField()
    name = serializers.CharField()
    image = serializers.CharField(allow_blank=True)
    category = serializers.CharField(allow_blank=True, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    stock = serializers.IntegerField(allow_null=True, required=False)
    quantity = serializers.IntegerField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)


class CartSerializer(serializers.Serializer):
    """
    Serializer for the session cart
    """
    items = CartItemSerializer(many=True)
    total_items = serializers.IntegerField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_empty = serializers.BooleanField()


class AddToCartSerializer(serializers.Serializer):
    """
    Serializer for adding items to cart
    """
    product_id = serializers.CharField()
    quantity = serializers.IntegerField(default=1)

    def validate_quantity(self, value):
        """Validate quantity is positive"""
        if value <= 0:
            raise serializers.ValidationError("Quantity must be greater than 0")
        return value


class UpdateCartItemSerializer(serializers.Serializer):
    """
    Serializer for updating cart item quantity; zero or less removes the item
    """
    quantity = serializers.IntegerField()
