"""Django ORM models (persistence layer).

These models back the Django event store. Domain logic lives in domain/models.py.
"""

from django.db import models

from event_collections.domain.models import BookingStatus, EventStatus, PostStatus


class Event(models.Model):
    """Persistence model for events, recurring parents and their children."""

    title = models.CharField(max_length=255, blank=True, default="")
    owner_id = models.IntegerField(null=True, blank=True, db_index=True)
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children",
    )
    status = models.CharField(
        max_length=20,
        choices=[(s.value, s.name) for s in PostStatus],
        default=PostStatus.PUBLISH.value,
    )
    event_status = models.CharField(
        max_length=32,
        choices=[(s.value, s.name) for s in EventStatus],
        default=EventStatus.OPEN.value,
    )
    start = models.DateTimeField()
    end = models.DateTimeField()

    class Meta:
        indexes = [
            models.Index(fields=["status", "start"]),
            models.Index(fields=["end"]),
        ]

    def __str__(self) -> str:
        return self.title or f"Event {self.pk}"


class Booking(models.Model):
    """Persistence model for a user's RSVP to an event."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="bookings")
    user_id = models.IntegerField()
    status = models.CharField(
        max_length=10,
        choices=[(s.value, s.name) for s in BookingStatus],
    )

    class Meta:
        indexes = [
            models.Index(fields=["status", "event"]),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} -> {self.event_id} ({self.status})"
