"""Tests for author age calculation and UTC normalization of author dates."""

from datetime import datetime, timedelta, timezone

import pytest

from course_library.models import Author
from course_library.schemas.requests import AuthorCreateWithDateOfDeath
from course_library.schemas.responses import get_current_age

UTC = timezone.utc


class TestGetCurrentAge:
    @pytest.mark.parametrize(
        "born,died,expected",
        [
            (datetime(1650, 7, 23, tzinfo=UTC), datetime(1700, 7, 22, tzinfo=UTC), 49),
            (datetime(1650, 7, 23, tzinfo=UTC), datetime(1700, 7, 23, tzinfo=UTC), 50),
            (datetime(1668, 5, 21), datetime(1720, 5, 20), 51),
            (datetime(1668, 5, 21, tzinfo=UTC), datetime(1720, 5, 20), 51),
        ],
    )
    def test_age_at_death(self, born, died, expected):
        assert get_current_age(born, died) == expected

    def test_offsets_are_compared_in_utc(self):
        # 23:30 on the 22nd at UTC-2 is already the 23rd in UTC
        died = datetime(1700, 7, 22, 23, 30, tzinfo=timezone(timedelta(hours=-2)))

        assert get_current_age(datetime(1650, 7, 23, tzinfo=UTC), died) == 50

    def test_living_author_age_uses_today(self):
        born = datetime.now(UTC) - timedelta(days=365 * 30 + 40)

        assert get_current_age(born) == 30


class TestAuthorDatesInUtc:
    def test_naive_input_is_taken_as_utc(self):
        author = AuthorCreateWithDateOfDeath(
            first_name="Anne",
            last_name="Bonny",
            date_of_birth="1697-03-08T00:00:00",
            date_of_death="1782-04-22T00:00:00",
            main_category="Ships",
        )

        assert author.date_of_birth == datetime(1697, 3, 8, tzinfo=UTC)
        assert author.date_of_death == datetime(1782, 4, 22, tzinfo=UTC)

    def test_offset_input_is_converted_to_utc(self):
        author = AuthorCreateWithDateOfDeath(
            first_name="Anne",
            last_name="Bonny",
            date_of_birth="1697-03-08T01:00:00+01:00",
            main_category="Ships",
        )

        assert author.date_of_birth.tzinfo == UTC
        assert author.date_of_birth == datetime(1697, 3, 8, tzinfo=UTC)
        assert author.date_of_death is None

    def test_author_columns_are_timezone_aware(self):
        columns = Author.__table__.c

        assert columns.date_of_birth.type.timezone is True
        assert columns.date_of_death.type.timezone is True
