"""API views for the booking domain.

Writes go through the message bus; the views only translate request
payloads into commands and domain exceptions into HTTP responses.
"""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import generics, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.catalog.exceptions import ResourceNotFound
from apps.pricing.exceptions import InvalidInterval, PricingError
from apps.pricing.services import PricingEngine
from shared.application.message_bus import message_bus

from .application.command_handlers import (
    CancelBookingCommand,
    CreateBookingCommand,
    JoinWaitlistCommand,
)
from .exceptions import BookingConflict, BookingError, BookingValidationError
from .filters import BusySlotFilterSet
from .models import BookingItem, BookingStatus
from .selectors import booking_history
from .serializers import (
    BookingCreateSerializer,
    BookingHistoryQuerySerializer,
    BookingHistorySerializer,
    BusySlotSerializer,
    QuoteSerializer,
    WaitlistEntrySerializer,
)

logger = logging.getLogger(__name__)


def error_response(exc: Exception) -> Response:
    """Map a domain exception onto the ``{"error": ...}`` response body."""

    if isinstance(exc, BookingConflict):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, (BookingValidationError, InvalidInterval)):
        code = status.HTTP_400_BAD_REQUEST
    else:
        # Unknown resources and exhausted equipment pools stay server errors.
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.error(f"Booking request failed: {exc}")
    return Response({"error": str(exc)}, status=code)


DOMAIN_ERRORS = (BookingError, PricingError, ResourceNotFound)


class BookingListCreateView(generics.ListAPIView):
    """GET: confirmed items busy on a day. POST: create a booking."""

    queryset = BookingItem.objects.filter(status=BookingStatus.CONFIRMED).order_by("start_time", "id")
    serializer_class = BusySlotSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = BusySlotFilterSet

    def post(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        command = CreateBookingCommand(
            user_name=data["user_name"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            items=serializer.resource_requests(),
        )
        try:
            result = message_bus.handle_command(command)
        except DOMAIN_ERRORS as exc:
            return error_response(exc)

        return Response(
            {
                "message": "Booking confirmed",
                "booking_id": result.booking_id,
                "total_price": str(result.total_price),
            },
            status=status.HTTP_201_CREATED,
        )


class BookingCancelView(APIView):
    def post(self, request, pk: int, *args, **kwargs):  # type: ignore
        try:
            result = message_bus.handle_command(CancelBookingCommand(booking_id=pk))
        except DOMAIN_ERRORS as exc:
            return error_response(exc)
        return Response({"message": result.message}, status=status.HTTP_200_OK)


class QuoteView(APIView):
    """Price a set of resources for a window without booking anything."""

    def post(self, request, *args, **kwargs):  # type: ignore
        serializer = QuoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            total = PricingEngine().compute_price(
                serializer.resource_requests(),
                data["start_time"],
                data["end_time"],
            )
        except DOMAIN_ERRORS as exc:
            return error_response(exc)
        return Response({"total_price": str(total)}, status=status.HTTP_200_OK)


class WaitlistView(APIView):
    def post(self, request, *args, **kwargs):  # type: ignore
        serializer = WaitlistEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        command = JoinWaitlistCommand(
            user_name=data["user_name"],
            resource_type=data["resource_type"],
            resource_id=data["resource_id"],
            start_time=data["start_time"],
            end_time=data["end_time"],
        )
        try:
            entry = message_bus.handle_command(command)
        except DOMAIN_ERRORS as exc:
            return error_response(exc)
        return Response(
            {"message": "Added to waitlist", "id": entry.id},
            status=status.HTTP_201_CREATED,
        )


class BookingHistoryView(APIView):
    def get(self, request, *args, **kwargs):  # type: ignore
        query = BookingHistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        bookings = booking_history(query.validated_data["user_name"])
        return Response(BookingHistorySerializer(bookings, many=True).data)
