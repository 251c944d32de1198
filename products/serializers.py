from rest_framework import serializers

from common.utils import validate_image_file


class ProductSerializer(serializers.Serializer):
    """
    Serializer for catalog products
    """
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    stock = serializers.IntegerField(read_only=True, allow_null=True)
    image = serializers.CharField(read_only=True)
    images = serializers.ListField(child=serializers.CharField(), read_only=True)


class ProductWriteSerializer(serializers.Serializer):
    """
    Serializer for creating and updating products (multipart)
    """
    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    description = serializers.CharField()
    category = serializers.CharField(max_length=100)
    stock = serializers.IntegerField(min_value=0)
    images = serializers.ListField(child=serializers.FileField(), default=list)

    def validate_images(self, value):
        """Validate every uploaded image"""
        for image in value:
            is_valid, message = validate_image_file(image)
            if not is_valid:
                raise serializers.ValidationError(f"{image.name}: {message}")
        return value

    def validate(self, data):
        """New products need at least one image"""
        if not self.context.get('editing') and not data.get('images'):
            raise serializers.ValidationError({'images': 'Please select at least one image'})
        return data
