import pytest

from core.exceptions import NotFoundError
from core.utils.result import Err, Ok


def test_ok_unwraps_value():
    result = Ok(3)

    assert result.is_ok
    assert result.unwrap() == 3


def test_err_unwrap_raises_wrapped_error():
    result = Err(NotFoundError("missing", resource="profile"))

    assert not result.is_ok
    with pytest.raises(NotFoundError):
        result.unwrap()
