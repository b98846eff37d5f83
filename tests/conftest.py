# tests/conftest.py
import sys
from datetime import date
from pathlib import Path

# ---------------------------------------------------------
# Ensure project root is on PYTHONPATH BEFORE app imports
# ---------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from agents.advice_agent import AdviceProvider, Persona
from services.feedback_sink import CsvFeedbackSink
from services.router import ConversationRouter
from services.stores import ExpenseLedger, GoalRecord, SessionStore
from tests.fakes import FakeAgent

TODAY = date(2025, 3, 14)


@pytest.fixture
def fake_agents():
    return {
        Persona.ENQUIRY: FakeAgent(output="Consider the CPF top-up scheme."),
        Persona.TIP: FakeAgent(output="Cook at home more often."),
    }


@pytest.fixture
def advice(fake_agents):
    return AdviceProvider(agents=fake_agents, timeout=1.0)


@pytest.fixture
def feedback_path(tmp_path):
    return tmp_path / "feedback.csv"


@pytest.fixture
def router(advice, feedback_path):
    return ConversationRouter(
        advice=advice,
        feedback_sink=CsvFeedbackSink(str(feedback_path)),
        sessions=SessionStore(),
        ledger=ExpenseLedger(),
        goals=GoalRecord(),
        clock=lambda: TODAY,
        menu_image=None,
        max_text_length=200,
    )


@pytest.fixture
def today():
    return TODAY
