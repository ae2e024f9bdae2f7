"""
Tests pour les conversions de dates des modeles SQLModel.
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import DateTime

from cinestore.infrastructure.persistence.models import (
    MovieModel,
    TokenModel,
    UserModel,
    from_storage_datetime,
    to_storage_datetime,
    utcnow,
)


class TestStorageDatetime:
    """Les dates sont manipulees en UTC aware."""

    def test_utcnow_aware(self):
        assert utcnow().tzinfo is timezone.utc

    def test_naive_supposee_utc(self):
        value = to_storage_datetime(datetime(2030, 1, 1, 12, 0))
        assert value == datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_autre_fuseau_converti(self):
        paris = timezone(timedelta(hours=2))
        value = to_storage_datetime(datetime(2030, 1, 1, 14, 0, tzinfo=paris))
        assert value.tzinfo is timezone.utc
        assert value.hour == 12

    def test_relecture(self):
        assert from_storage_datetime(None) is None
        assert from_storage_datetime(datetime(2030, 1, 1)).tzinfo is timezone.utc

    def test_colonnes_avec_fuseau(self):
        for column in (
            MovieModel.__table__.c.created_at,
            UserModel.__table__.c.created_at,
            TokenModel.__table__.c.expiry,
        ):
            assert isinstance(column.type, DateTime)
            assert column.type.timezone is True
