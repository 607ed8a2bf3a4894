import pytest

from aisummarizer.infrastructure.ai.huggingface.request_builder import RequestBuilder

@pytest.fixture
def builder():
    return RequestBuilder()

@pytest.mark.parametrize(
    "length, expected_max, expected_min",
    [
        (10, 50, 30),       # short input: floors apply
        (200, 50, 30),      # 200 // 4 == 50
        (400, 100, 33),
        (600, 150, 50),
        (800, 200, 66),
        (4000, 200, 66),    # ceiling
    ],
)
def test_lengths_scale_with_input(builder, length, expected_max, expected_min):
    request = builder.build_request("x" * length)
    assert request.max_length == expected_max
    assert request.min_length == expected_min

def test_lengths_always_within_bounds(builder):
    for length in range(0, 2000, 37):
        request = builder.build_request("a" * length)
        assert 50 <= request.max_length <= 200
        assert 30 <= request.min_length <= request.max_length

def test_decoding_and_options_are_fixed(builder):
    request = builder.build_request("Some article text.")
    assert request.do_sample is False
    assert request.temperature == 0.3
    assert request.wait_for_model is True
    assert request.use_cache is False

def test_payload_shape(builder):
    payload = builder.build_request("Hello world").to_payload()
    assert payload == {
        "inputs": "Hello world",
        "parameters": {"max_length": 50, "min_length": 30, "do_sample": False, "temperature": 0.3},
        "options": {"wait_for_model": True, "use_cache": False},
    }
