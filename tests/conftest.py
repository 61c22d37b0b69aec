"""
Brief: Global pytest configuration enforcing per-test 10s timeout.

Inputs:
  - None

Outputs:
  - None
"""

import os
import signal
import sys

import dns.message
import dns.rrset
import pytest

# Ensure 'src' is on sys.path so 'wasd' package is importable in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


def _alarm_handler(signum, frame):
    """
    Brief: Signal handler that raises TimeoutError when alarm triggers.

    Inputs:
      - signum: signal number (int)
      - frame: current frame (ignored)

    Outputs:
      - None: Raises TimeoutError to fail the test
    """
    raise TimeoutError("Test exceeded 10 seconds")


# Install handler if supported on this platform
if hasattr(signal, "SIGALRM"):
    signal.signal(signal.SIGALRM, _alarm_handler)


@pytest.fixture(autouse=True)
def enforce_test_timeout():
    """
    Brief: Enforce a hard 10-second timeout for each test.

    Inputs:
      - None

    Outputs:
      - None: Cancels alarm after test
    """
    if hasattr(signal, "SIGALRM"):
        signal.alarm(10)
        try:
            yield
        finally:
            signal.alarm(0)
    else:
        # Fallback: no-op on platforms without SIGALRM
        yield


def _make_response(name, rdtype, *rdatas):
    """
    Brief: Build a dnspython response to a (name, rdtype) question.

    Inputs:
      - name: owner name (presentation format)
      - rdtype: record type mnemonic
      - rdatas: rdata texts placed in a single answer RRset

    Outputs:
      - dns.message.Message
    """
    response = dns.message.make_response(dns.message.make_query(name, rdtype))
    if rdatas:
        response.answer.append(dns.rrset.from_text(name, 300, "IN", rdtype, *rdatas))
    return response


@pytest.fixture
def make_response():
    """Fixture exposing the response builder to tests."""
    return _make_response
