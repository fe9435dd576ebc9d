from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from dockgate.app.services.redaction import IP_PORT_RE, REDACTED, redact


def test_redact_connection_line():
    assert redact("Connection from 10.0.0.5:4512 accepted\n") == "Connection from [REDACTED] accepted\n"


def test_redact_leaves_text_without_matches_unchanged():
    text = "listening on port 8080, peer 10.0.0.5 (no port), version 1.2.3.4\n"
    assert redact(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "a 1.2.3.4:5 b 192.168.100.200:65535 c",
        "127.0.0.1:80\n127.0.0.1:443\n",
        "[10.1.1.1:22][10.1.1.2:23]",
    ],
)
def test_redact_length_and_spans(text: str):
    matches = list(IP_PORT_RE.finditer(text))
    assert matches

    out = redact(text)
    expected_delta = sum(len(REDACTED) - len(m.group(0)) for m in matches)
    assert len(out) - len(text) == expected_delta
    assert out.count(REDACTED) == len(matches)

    # Every gap between matches survives byte for byte.
    pos = 0
    for m in matches:
        gap = text[pos : m.start()]
        assert gap in out
        pos = m.end()
    assert out.endswith(text[pos:])


def test_redact_does_not_validate_octets():
    assert redact("bogus 999.999.999.999:99999 end") == "bogus [REDACTED] end"


def test_redact_requires_port_boundary():
    # Six digits is not a port.
    assert redact("x 10.0.0.5:123456 y") == "x 10.0.0.5:123456 y"


@pytest.mark.parametrize(
    "text",
    ["", "plain", "10.0.0.5:4512", "a 1.1.1.1:1 b 2.2.2.2:22222 c", "[REDACTED]:80"],
)
def test_redact_is_idempotent(text: str):
    once = redact(text)
    assert redact(once) == once


def test_redact_from_many_threads():
    lines = [f"peer 10.0.{i % 256}.{i % 7}:{1000 + i} ok" for i in range(500)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(redact, lines))
    assert results == ["peer [REDACTED] ok"] * len(lines)
