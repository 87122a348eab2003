from datetime import datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import serializers


def _parse_day(value):
    # None for anything that is not exactly a calendar date
    try:
        return parse_date(value.strip())
    except ValueError:
        return None


class FlexibleDateTimeField(serializers.DateTimeField):
    """DateTimeField that also takes a bare ``YYYY-MM-DD`` value.

    A date-only input is read as midnight in the current time zone, the same
    instant a browser date picker would produce for that day.
    """

    def to_internal_value(self, value):
        if isinstance(value, str):
            day = _parse_day(value)
            if day is not None:
                return timezone.make_aware(datetime.combine(day, time.min), timezone.get_current_timezone())
        return super().to_internal_value(value)
