"""Serializers for reviews.

Provide both read and write serializers for the ``Review`` model. The
creating user and venue are inferred from the request in the view.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Review


class ReviewAuthorSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    full_name = serializers.CharField()
    avatar = serializers.CharField()


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer with the author's public profile."""

    user = ReviewAuthorSerializer(read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'user', 'venue', 'booking', 'rating', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """Serializer for creating a new review."""

    booking_id = serializers.IntegerField(min_value=1)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(min_length=5, trim_whitespace=True)
