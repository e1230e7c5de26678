"""Property-based tests for stay and pricing invariants."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from hypothesis import given
from hypothesis import strategies as st

from cottage_booking.services.pricing import StayDates, calculate_cost, nights, normalize_day

# Strategies for generating test data
days = st.dates(min_value=date(2020, 1, 1), max_value=date(2030, 12, 31))
stay_lengths = st.integers(min_value=1, max_value=60)
prices = st.decimals(min_value=Decimal("0"), max_value=Decimal("100000"), places=2)


@given(check_in=days, length=stay_lengths, rate=prices, package_price=prices)
def test_total_is_room_plus_package(check_in, length, rate, package_price):
    """Total cost is always nights times rate plus the flat package price."""
    cost = calculate_cost(rate, package_price, check_in, check_in + timedelta(days=length))

    assert cost.nights == length
    assert cost.room_cost == rate * length
    assert cost.total_cost == rate * length + package_price
    assert cost.total_cost >= cost.package_cost


@given(check_in=days, length=stay_lengths)
def test_stay_covers_each_night_once(check_in, length):
    """A stay yields one day per night, in order, check-out excluded."""
    check_out = check_in + timedelta(days=length)
    stay = list(StayDates(check_in, check_out))

    assert len(stay) == nights(check_in, check_out) == length
    assert stay[0] == check_in
    assert stay[-1] == check_out - timedelta(days=1)
    assert check_out not in StayDates(check_in, check_out)
    assert all(b - a == timedelta(days=1) for a, b in zip(stay, stay[1:]))


@given(first_in=days, first_len=stay_lengths, second_in=days, second_len=stay_lengths)
def test_overlap_matches_shared_nights(first_in, first_len, second_in, second_len):
    """Two stays conflict exactly when their half-open ranges intersect."""
    first_out = first_in + timedelta(days=first_len)
    second_out = second_in + timedelta(days=second_len)

    shared = set(StayDates(first_in, first_out)) & set(StayDates(second_in, second_out))
    intersects = first_in < second_out and second_in < first_out

    assert bool(shared) == intersects


@given(
    moment=st.datetimes(min_value=datetime(2020, 1, 1), max_value=datetime(2030, 12, 31)),
    offset_hours=st.integers(min_value=-12, max_value=14),
)
def test_normalize_day_uses_utc(moment, offset_hours):
    """Aware datetimes land on their UTC calendar day."""
    aware = moment.replace(tzinfo=timezone(timedelta(hours=offset_hours)))

    assert normalize_day(aware) == aware.astimezone(timezone.utc).date()
    assert normalize_day(moment) == moment.date()


@given(check_in=days, backwards=st.integers(min_value=0, max_value=30))
def test_empty_or_reversed_stays_have_no_nights(check_in, backwards):
    """Check-out on or before check-in gives no billable nights."""
    check_out = check_in - timedelta(days=backwards)

    assert nights(check_in, check_out) < 1
    assert list(StayDates(check_in, check_out)) == []
