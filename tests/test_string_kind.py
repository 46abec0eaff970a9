import pytest

from tfproto5.string_kind import StringKind


@pytest.mark.parametrize(
    "kind, text",
    [(StringKind.PLAIN, "PLAIN"), (StringKind.MARKDOWN, "MARKDOWN")],
)
def test_str(kind, text):
    assert str(kind) == text


@pytest.mark.parametrize("number, kind", [(0, StringKind.PLAIN), (1, StringKind.MARKDOWN)])
def test_wire_values(number, kind):
    assert StringKind(number) is kind
    assert int(kind) == number


def test_unknown_value_rejected():
    with pytest.raises(ValueError):
        StringKind(2)


@pytest.mark.parametrize("number, text", [(0, "PLAIN"), (1, "MARKDOWN")])
def test_round_trip_by_name(number, text):
    kind = StringKind(number)
    name = str(kind)
    assert name == text
    assert StringKind[name] is kind
    assert int(StringKind[name]) == number