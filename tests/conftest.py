from msformula.chem.mass import MassEvaluator
from msformula.config import MassConfiguration
import pytest
import requests


class FakeResponse:
    """Minimal stand-in for the requests.Response returned by ChemCalc."""

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def offline_evaluator():
    config = MassConfiguration(use_remote_normalizer=False)
    return MassEvaluator(config)


@pytest.fixture
def chemcalc(monkeypatch):
    """
    Patch requests.get. Use ``respond`` or set ``error`` to control the
    answer. Calls are recorded in ``calls``.
    """

    class ChemCalcStub:
        response = FakeResponse(200, {"mf": "C6H12O2"})
        error = None
        calls = list()

        @classmethod
        def respond(cls, status_code, payload):
            cls.response = FakeResponse(status_code, payload)

    def get(url, params=None, timeout=None):
        ChemCalcStub.calls.append({"url": url, "params": params, "timeout": timeout})
        if ChemCalcStub.error is not None:
            raise ChemCalcStub.error
        return ChemCalcStub.response

    monkeypatch.setattr(requests, "get", get)
    return ChemCalcStub
