import pytest

from src.platform.logging.loguru_io_config import MASK
from src.platform.logging.loguru_io_utils import (
    mask_sensitive,
    normalize_args_kwargs,
    should_mask_keyword,
    truncate_content,
)


@pytest.mark.unit
class TestMasking:
    def test_customer_email_keyword_is_masked(self):
        assert should_mask_keyword('customer_email', 'jane@x.com') == MASK
        assert should_mask_keyword('customer_name', 'Jane') == 'Jane'

    def test_email_inside_repr_is_masked(self):
        text = "Booking(showtime_id=7, customer_name='Jane', customer_email='jane@x.com')"

        masked = mask_sensitive(text)

        assert 'jane@x.com' not in masked
        assert f"customer_email='{MASK}'" in masked
        assert "customer_name='Jane'" in masked

    def test_json_style_email_is_masked(self):
        masked = mask_sensitive('{"customerEmail": "jane@x.com", "seatIds": [101]}')

        assert 'jane@x.com' not in masked
        assert '"seatIds": [101]' in masked

    def test_objects_without_sensitive_content_are_returned_untouched(self):
        seat_ids = [101, 102]

        assert mask_sensitive(seat_ids) is seat_ids


@pytest.mark.unit
class TestTruncate:
    def test_long_strings_are_cut(self):
        result = truncate_content('x' * 30, max_length=10)

        assert result == 'x' * 10 + '...(truncated 20 chars)'

    def test_short_strings_and_non_strings_pass_through(self):
        assert truncate_content('short', max_length=10) == 'short'
        assert truncate_content([1, 2, 3], max_length=1) == [1, 2, 3]


@pytest.mark.unit
class TestNormalizeArgsKwargs:
    def test_unknown_kwargs_are_dropped(self):
        def create_booking(*, showtime_id: int, seat_ids: list[int]) -> None: ...

        args, kwargs = normalize_args_kwargs(
            create_booking, showtime_id=7, seat_ids=[101], trace_id='abc'
        )

        assert args == ()
        assert kwargs == {'showtime_id': 7, 'seat_ids': [101]}
