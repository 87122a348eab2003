from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from django.contrib.auth.models import User

from .models import Profile


class UserRegistrationSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(required=True)

    class Meta:
        model = User
        fields = ('id', 'username', 'email', 'password', 'first_name', 'last_name')
        extra_kwargs = {
            'password': {'write_only': True},
            'id': {'read_only': True},
            'first_name': {'required': False},
            'last_name': {'required': False},
        }

    def create(self, validated_data):
        user = User.objects.create_user(
            username=validated_data['username'],
            email=validated_data['email'],
            password=validated_data['password'],
            first_name=validated_data.get('first_name', ''),
            last_name=validated_data.get('last_name', '')
        )
        return user


def get_subject_id(user):
    profile, _ = Profile.objects.get_or_create(user=user)
    return str(profile.subject_id)


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """JWT pair carrying the identity subject id in the ``sub`` claim"""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['sub'] = get_subject_id(user)
        token['username'] = user.username
        token['email'] = user.email
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data.update({
            'userSub': get_subject_id(self.user),
            'username': self.user.username,
        })
        return data


class SessionSerializer(serializers.Serializer):
    username = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    userSub = serializers.SerializerMethodField()

    def get_userSub(self, obj):
        return get_subject_id(obj)
