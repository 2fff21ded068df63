from datetime import date

from compliance_engine.exclusions.model import ExclusionPeriod

from fakes import checkin


def test_friday_to_monday_streak_survives(world, now):
    world.add_worker(1, date(2025, 1, 1), current_streak=5, longest_streak=9, last_checkin_date=date(2025, 3, 7))

    result = world.engine.derive_streak(1, now=now)

    assert (result.current, result.longest, result.continues) == (5, 9, True)


def test_missed_work_day_zeroes_streak(world, now):
    world.add_worker(1, date(2025, 1, 1), current_streak=5, longest_streak=3, last_checkin_date=date(2025, 3, 5))

    result = world.engine.derive_streak(1, now=now)

    assert result.current == 0
    assert result.longest == 3


def test_holiday_and_leave_bridge_the_gap(world, now):
    world.add_worker(1, date(2025, 1, 1), current_streak=4, longest_streak=4, last_checkin_date=date(2025, 3, 5))
    world.exclusions.holidays["org"] = ["2025-03-06"]
    world.exclusions.periods.append(ExclusionPeriod(worker_id=1, start_date_key="2025-03-07", end_date_key="2025-03-07"))

    result = world.engine.derive_streak(1, now=now)

    assert result.continues
    assert result.current == 4


def test_worker_without_checkins(world, now):
    world.add_worker(1, date(2025, 1, 1))

    assert world.engine.derive_streak(1, now=now).to_dict() == {"current": 0, "longest": 0, "continues": False}


def test_missing_stored_streak_is_rebuilt_from_checkins(world, now):
    world.add_worker(1, date(2025, 3, 1), longest_streak=1, last_checkin_date=date(2025, 3, 7))
    world.checkins.rows += [checkin(1, k) for k in ("2025-03-03", "2025-03-05", "2025-03-06", "2025-03-07")]
    world.exclusions.holidays["org"] = ["2025-03-04"]

    result = world.engine.derive_streak(1, now=now)

    # Mon, (holiday), Wed, Thu, Fri and Monday is today.
    assert (result.current, result.longest, result.continues) == (4, 4, True)
