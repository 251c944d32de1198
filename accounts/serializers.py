from rest_framework import serializers

from .services import ROLE_CHOICES, STATUS_CHOICES


class UserSerializer(serializers.Serializer):
    """
    Serializer for users in the admin table
    """
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    created_at = serializers.CharField(read_only=True, allow_null=True)
    is_admin = serializers.BooleanField(read_only=True)


class UserWriteSerializer(serializers.Serializer):
    """
    Serializer for creating and updating users
    """
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, required=False, allow_blank=True)
    # Left out on update means unchanged
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False)
    status = serializers.ChoiceField(choices=STATUS_CHOICES, required=False)

    def validate(self, data):
        """New users need a password"""
        if not self.context.get('editing') and not data.get('password'):
            raise serializers.ValidationError({'password': 'Password is required'})
        return data
