import base64
import os

import pytest

from features.generation.encoding import decode_base64, encode_base64_chunked, to_data_url


def test_large_buffer_round_trips():
    data = os.urandom(200_000)

    encoded = encode_base64_chunked(data)

    assert decode_base64(encoded) == data
    assert encoded == base64.b64encode(data).decode("ascii")


@pytest.mark.parametrize("size", [0, 1, 2, 3, 3071, 3072, 3073])
def test_chunk_boundaries(size):
    data = bytes(range(256)) * (size // 256 + 1)
    data = data[:size]

    assert encode_base64_chunked(data, chunk_size=3) == base64.b64encode(data).decode("ascii")


@pytest.mark.parametrize("chunk_size", [0, -3, 1024, 1000])
def test_chunk_size_must_be_positive_multiple_of_three(chunk_size):
    with pytest.raises(ValueError):
        encode_base64_chunked(b"abc", chunk_size=chunk_size)


def test_data_url_prefix_and_decode():
    url = to_data_url(b"ID3audio", "audio/mp3")

    assert url.startswith("data:audio/mp3;base64,")
    assert decode_base64(url) == b"ID3audio"


def test_decode_rejects_garbage():
    with pytest.raises(ValueError):
        decode_base64("not base64!!")
