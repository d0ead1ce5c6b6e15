"""Serializers for the venues domain."""

from __future__ import annotations

from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer

from .models import Court, Venue

TIME_FORMAT = "%H:%M"


class CourtSerializer(serializers.ModelSerializer):
    opens_at = serializers.TimeField(format=TIME_FORMAT, input_formats=[TIME_FORMAT])
    closes_at = serializers.TimeField(format=TIME_FORMAT, input_formats=[TIME_FORMAT])

    class Meta:
        model = Court
        fields = [
            "id",
            "name",
            "sport_type",
            "price_per_hour",
            "opens_at",
            "closes_at",
            "is_active",
        ]
        read_only_fields = ["id"]

    def validate(self, attrs):  # type: ignore
        opens_at = attrs.get("opens_at", getattr(self.instance, "opens_at", None))
        closes_at = attrs.get("closes_at", getattr(self.instance, "closes_at", None))
        if opens_at and closes_at and closes_at <= opens_at:
            raise serializers.ValidationError({"closes_at": "Closing time must be after opening time."})
        return attrs


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(required=False, allow_blank=True, max_length=255)
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    state = serializers.CharField(required=False, allow_blank=True, max_length=100)
    zip_code = serializers.CharField(required=False, allow_blank=True, max_length=20)
    lat = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)
    lng = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)

    FIELD_MAP = {
        "street": "address_street",
        "city": "address_city",
        "state": "address_state",
        "zip_code": "address_zip_code",
        "lat": "latitude",
        "lng": "longitude",
    }

    @classmethod
    def to_model_fields(cls, data: dict) -> dict:
        return {cls.FIELD_MAP[key]: value for key, value in data.items()}


class VenueSerializer(serializers.ModelSerializer):
    """Read serializer used by lists."""

    owner = UserSummarySerializer(read_only=True)
    address = serializers.ReadOnlyField()
    rating = serializers.SerializerMethodField()
    courts = CourtSerializer(many=True, read_only=True)

    class Meta:
        model = Venue
        fields = [
            "id",
            "name",
            "description",
            "address",
            "owner",
            "sports",
            "amenities",
            "photos",
            "courts",
            "rating",
            "status",
            "rejection_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_rating(self, obj: Venue) -> dict[str, object]:
        return {"average": float(obj.rating_average), "count": obj.rating_count}


class VenueDetailSerializer(VenueSerializer):
    """Venue with its most recent reviews."""

    reviews = serializers.SerializerMethodField()

    class Meta(VenueSerializer.Meta):
        fields = VenueSerializer.Meta.fields + ["reviews"]
        read_only_fields = fields

    def get_reviews(self, obj: Venue) -> list[dict]:
        from apps.reviews.serializers import ReviewSerializer

        reviews = obj.reviews.select_related("user").order_by("-created_at")
        return ReviewSerializer(reviews, many=True).data


class VenueWriteSerializer(serializers.ModelSerializer):
    """Serializer for create/update operations by the venue owner."""

    name = serializers.CharField(min_length=2, max_length=200)
    description = serializers.CharField(min_length=10)
    address = AddressSerializer(required=False)
    sports = serializers.ListField(child=serializers.CharField(max_length=50), min_length=1)
    amenities = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    photos = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    courts = CourtSerializer(many=True, required=False)

    class Meta:
        model = Venue
        fields = [
            "name",
            "description",
            "address",
            "sports",
            "amenities",
            "photos",
            "courts",
        ]

    def validate(self, attrs):  # type: ignore
        if self.instance is not None and "courts" in attrs:
            raise serializers.ValidationError({"courts": "Manage courts through the courts endpoint."})
        return attrs

    @transaction.atomic
    def create(self, validated_data):  # type: ignore
        courts = validated_data.pop("courts", [])
        address = validated_data.pop("address", {})
        venue = Venue.objects.create(
            owner=self.context["request"].user,
            **AddressSerializer.to_model_fields(address),
            **validated_data,
        )
        Court.objects.bulk_create([Court(venue=venue, **court) for court in courts])
        return venue

    def update(self, instance: Venue, validated_data):  # type: ignore
        address = validated_data.pop("address", None)
        if address:
            validated_data.update(AddressSerializer.to_model_fields(address))
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance


class AvailabilityQuerySerializer(serializers.Serializer):
    court_id = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
