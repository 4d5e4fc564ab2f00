from datetime import datetime, timedelta, timezone

from invoicer.app.core.time import utc_now
from invoicer.app.models.client import Client


def test_utc_now_falls_between_surrounding_clock_reads():
    before = datetime.now(timezone.utc)
    value = utc_now()
    after = datetime.now(timezone.utc)
    assert before <= value <= after
    assert value.utcoffset() == timedelta(0)


def test_model_timestamps_default_to_utc_now(db, make_user):
    user = make_user()
    started = utc_now()
    client = Client(user_id=user.id, name="Acme")
    db.add(client)
    db.commit()

    # SQLite hands DateTime values back without tzinfo
    created_at = client.created_at.replace(tzinfo=timezone.utc)
    assert created_at >= started - timedelta(seconds=1)
    assert client.updated_at is not None
