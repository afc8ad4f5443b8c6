from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from trichoscalp.infrastructure.persistence.evaluation_repository import EvaluationRepository
from trichoscalp.models import STATUS_ANALYZING, STATUS_PENDING, Evaluation
from trichoscalp.services.analysis import EvaluationNotFoundError, synthesize, zero_noise
from trichoscalp.utils.timezone_utils import ensure_utc

JAN = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
FEB = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)
MAR = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _store_analysis(repo, evaluation):
    result = synthesize(
        ["a.jpg", "b.jpg"], evaluation.client_id, evaluation.id, noise=zero_noise
    )
    repo.save_analysis(evaluation.id, result)
    return result


def test_create_generates_id_and_pending_status(db_session):
    repo = EvaluationRepository(db_session)
    evaluation = repo.create("cli-1", created_at=JAN)

    assert evaluation.id
    assert evaluation.client_id == "cli-1"
    assert evaluation.status == STATUS_PENDING
    assert evaluation.analysis is None
    assert ensure_utc(evaluation.created_at) == JAN
    assert repo.get_by_id(evaluation.id) is evaluation


def test_get_by_id_unknown_returns_none(db_session):
    assert EvaluationRepository(db_session).get_by_id("missing") is None


def test_save_and_get_analysis_round_trip(db_session):
    repo = EvaluationRepository(db_session)
    evaluation = repo.create("cli-1", evaluation_id="av-1")
    stored = _store_analysis(repo, evaluation)

    loaded = repo.get_analysis("av-1")

    assert loaded == stored
    assert isinstance(db_session.get(Evaluation, "av-1").analysis, dict)


def test_get_analysis_without_analysis_returns_none(db_session):
    repo = EvaluationRepository(db_session)
    repo.create("cli-1", evaluation_id="av-1")

    assert repo.get_analysis("av-1") is None
    assert repo.get_analysis("missing") is None


def test_get_previous_analyzed_picks_most_recent_other_evaluation(db_session):
    repo = EvaluationRepository(db_session)
    oldest = repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    middle = repo.create("cli-1", evaluation_id="av-2", created_at=FEB)
    current = repo.create("cli-1", evaluation_id="av-3", created_at=MAR)
    other_client = repo.create("cli-2", evaluation_id="av-9", created_at=MAR)
    for evaluation in (oldest, middle, other_client):
        _store_analysis(repo, evaluation)

    previous = repo.get_previous_analyzed("cli-1", current.id)

    assert previous.id == "av-2"


def test_get_previous_analyzed_before_ignores_newer_evaluations(db_session):
    repo = EvaluationRepository(db_session)
    older = repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    newer = repo.create("cli-1", evaluation_id="av-2", created_at=MAR)
    _store_analysis(repo, older)
    _store_analysis(repo, newer)

    assert repo.get_previous_analyzed("cli-1", "av-1", before=older.created_at) is None
    assert repo.get_previous_analyzed("cli-1", "av-2", before=newer.created_at).id == "av-1"


def test_get_previous_analyzed_ignores_unanalyzed_and_excluded(db_session):
    repo = EvaluationRepository(db_session)
    analyzed = repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    repo.create("cli-1", evaluation_id="av-2", created_at=FEB)
    _store_analysis(repo, analyzed)

    assert repo.get_previous_analyzed("cli-1", "av-3").id == "av-1"
    assert repo.get_previous_analyzed("cli-1", "av-1") is None


def test_list_analyzed_for_client_newest_first(db_session):
    repo = EvaluationRepository(db_session)
    for evaluation_id, when in (("av-1", JAN), ("av-3", MAR), ("av-2", FEB)):
        _store_analysis(repo, repo.create("cli-1", evaluation_id=evaluation_id, created_at=when))
    repo.create("cli-1", evaluation_id="av-4", created_at=MAR)

    listed = repo.list_analyzed_for_client("cli-1")

    assert [evaluation.id for evaluation in listed] == ["av-3", "av-2", "av-1"]


def test_set_status(db_session):
    repo = EvaluationRepository(db_session)
    repo.create("cli-1", evaluation_id="av-1")

    repo.set_status("av-1", STATUS_ANALYZING)

    assert repo.get_by_id("av-1").status == STATUS_ANALYZING


def test_writes_to_unknown_evaluation_raise(db_session):
    repo = EvaluationRepository(db_session)
    result = synthesize([], "cli-1", "missing", noise=zero_noise)

    with pytest.raises(EvaluationNotFoundError):
        repo.set_status("missing", STATUS_ANALYZING)
    with pytest.raises(EvaluationNotFoundError):
        repo.save_analysis("missing", result)


def test_parse_analysis_rejects_invalid_payload(db_session):
    evaluation = Evaluation(id="av-x", client_id="cli-1", analysis={"quantitative": {}})

    assert EvaluationRepository.parse_analysis(evaluation) is None


class _FailingSession:
    def __init__(self):
        self.rolled_back = False

    def query(self, model):
        raise SQLAlchemyError("connection lost")

    def rollback(self):
        self.rolled_back = True


def test_query_errors_are_logged_and_reraised():
    repo = EvaluationRepository(_FailingSession())

    with pytest.raises(SQLAlchemyError):
        repo.get_previous_analyzed("cli-1", "av-1")
    with pytest.raises(SQLAlchemyError):
        repo.list_analyzed_for_client("cli-1")
