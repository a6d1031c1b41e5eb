import html

import bleach
from django.conf import settings
from django.core.validators import MaxValueValidator
from rest_framework import serializers

from ward.models import Patient
from ward.services import patients


def _score_limit():
    # PositiveIntegerField's upper bound depends on the database backend
    field = Patient._meta.get_field('score')
    return next((v.limit_value for v in field.validators if isinstance(v, MaxValueValidator)), None)


class PatientSerializer(serializers.ModelSerializer):
    """Validates the patient form and writes through the persistence gateway.

    Field names follow the form/JSON surface (``birthDate``) rather than the
    model columns.  Names are stored exactly as submitted; a name that
    contains markup is rejected rather than rewritten.
    """
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(
        min_length=3,
        max_length=20,
        error_messages={
            'blank': 'Name must not be empty.',
            'required': 'Name must not be empty.',
            'min_length': 'Name must be between 3 and 20 characters.',
            'max_length': 'Name must be between 3 and 20 characters.',
        },
    )
    birthDate = serializers.DateField(source='birth_date', required=False, allow_null=True)
    sick = serializers.BooleanField(required=False, default=False)
    score = serializers.IntegerField(
        min_value=0,
        required=False,
        default=0,
        error_messages={'min_value': 'Score must be zero or greater.'},
    )

    class Meta:
        model = Patient
        fields = ['id', 'name', 'birthDate', 'sick', 'score']

    def validate_name(self, v):
        if html.unescape(bleach.clean(v, tags=set(), strip=True)) != v:
            raise serializers.ValidationError('Name must not contain markup.')
        return v

    def validate_score(self, v):
        limit = _score_limit()
        if limit is not None and v > limit:
            raise serializers.ValidationError(f'Score must be at most {limit}.')
        return v

    def create(self, validated_data):
        return patients.save(Patient(**validated_data))

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        return patients.save(instance)


class PatientListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=0)
    size = serializers.IntegerField(required=False, min_value=1)
    keyword = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)

    def validate_size(self, v):
        if v > settings.WARD_MAX_PAGE_SIZE:
            raise serializers.ValidationError(f'size must be at most {settings.WARD_MAX_PAGE_SIZE}')
        return v

    def validate(self, attrs):
        attrs.setdefault('page', 0)
        attrs.setdefault('size', settings.WARD_PAGE_SIZE)
        attrs.setdefault('keyword', '')
        return attrs
