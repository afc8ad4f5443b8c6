from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from trichoscalp.domain.models import EvolutionStatus, NoPriorEvaluation
from trichoscalp.infrastructure.persistence.evaluation_repository import EvaluationRepository
from trichoscalp.models import STATUS_ANALYZING, STATUS_COMPLETED, STATUS_PENDING
from trichoscalp.services.analysis import (
    AnalysisPersistenceError,
    AnalysisRequestError,
    EvaluationNotFoundError,
    zero_noise,
)
from trichoscalp.services.analysis.service import AnalysisService

JAN = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
MAR = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(db_session):
    return AnalysisService(db_session, noise=zero_noise)


@pytest.fixture
def repo(db_session):
    return EvaluationRepository(db_session)


def test_first_analysis_is_stored_without_comparison(service, repo, full_image_set):
    repo.create("cli-1", evaluation_id="av-1", created_at=JAN)

    result = service.run_analysis("av-1", "cli-1", full_image_set)

    assert isinstance(result.comparison, NoPriorEvaluation)
    assert repo.get_analysis("av-1") == result
    assert repo.get_by_id("av-1").status == STATUS_COMPLETED


def test_second_analysis_compares_with_previous(service, repo, full_image_set):
    repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    repo.create("cli-1", evaluation_id="av-2", created_at=MAR)
    service.run_analysis("av-1", "cli-1", full_image_set[:1])

    result = service.run_analysis("av-2", "cli-1", full_image_set)

    assert result.has_comparison
    evolution = result.comparison.evolution
    assert evolution.status is EvolutionStatus.MELHORA
    assert evolution.improved_count == 5
    assert result.comparison.previous_evaluation_date == JAN.date()
    assert result.comparison.previous.densidade_capilar == 0.53


def test_reanalysis_of_older_evaluation_ignores_newer_ones(service, repo, full_image_set):
    repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    repo.create("cli-1", evaluation_id="av-2", created_at=MAR)
    service.run_analysis("av-1", "cli-1", full_image_set)
    service.run_analysis("av-2", "cli-1", full_image_set)

    result = service.run_analysis("av-1", "cli-1", full_image_set)

    assert not result.has_comparison
    assert result.comparison.kind == "first_evaluation"


def test_other_clients_are_never_compared(service, repo, full_image_set):
    repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    repo.create("cli-2", evaluation_id="av-2", created_at=MAR)
    service.run_analysis("av-1", "cli-1", full_image_set)

    result = service.run_analysis("av-2", "cli-2", full_image_set)

    assert not result.has_comparison


def test_empty_image_list_is_rejected(service, repo):
    repo.create("cli-1", evaluation_id="av-1")

    with pytest.raises(AnalysisRequestError, match="Nenhuma imagem disponível para análise"):
        service.run_analysis("av-1", "cli-1", [])


def test_missing_ids_are_rejected(service, full_image_set):
    with pytest.raises(AnalysisRequestError, match="Parâmetros inválidos para análise"):
        service.run_analysis("", "cli-1", full_image_set)
    with pytest.raises(AnalysisRequestError):
        service.run_analysis("av-1", "", full_image_set)


def test_unknown_evaluation(service, full_image_set):
    with pytest.raises(EvaluationNotFoundError):
        service.run_analysis("missing", "cli-1", full_image_set)


def test_evaluation_of_another_client_is_rejected(service, repo, full_image_set):
    repo.create("cli-1", evaluation_id="av-1")

    with pytest.raises(AnalysisRequestError):
        service.run_analysis("av-1", "cli-2", full_image_set)


def test_prior_lookup_failure_continues_without_comparison(
    service, repo, full_image_set, monkeypatch
):
    repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    repo.create("cli-1", evaluation_id="av-2", created_at=MAR)
    service.run_analysis("av-1", "cli-1", full_image_set)

    def failing_lookup(client_id, exclude_evaluation_id, before=None):
        raise SQLAlchemyError("timeout")

    monkeypatch.setattr(service.repository, "get_previous_analyzed", failing_lookup)

    result = service.run_analysis("av-2", "cli-1", full_image_set)

    assert not result.has_comparison


def test_storage_failure_is_wrapped(service, repo, full_image_set, monkeypatch):
    repo.create("cli-1", evaluation_id="av-1")

    def failing_save(evaluation_id, result):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(service.repository, "save_analysis", failing_save)

    with pytest.raises(AnalysisPersistenceError):
        service.run_analysis("av-1", "cli-1", full_image_set)
    assert repo.get_by_id("av-1").status == STATUS_PENDING
    assert service.get_analysis_status("av-1").status == "idle"


def test_analysis_status_lifecycle(service, repo, full_image_set):
    repo.create("cli-1", evaluation_id="av-1")
    assert service.get_analysis_status("av-1").status == "idle"

    repo.set_status("av-1", STATUS_ANALYZING)
    assert service.get_analysis_status("av-1").status == "processing"

    result = service.run_analysis("av-1", "cli-1", full_image_set)
    report = service.get_analysis_status("av-1")
    assert report.status == "completed"
    assert report.analysis == result


def test_analysis_status_unknown_evaluation(service):
    with pytest.raises(EvaluationNotFoundError):
        service.get_analysis_status("missing")


def test_client_evolution_with_single_analysis(service, repo, full_image_set):
    repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    service.run_analysis("av-1", "cli-1", full_image_set)

    evolution = service.get_client_evolution("cli-1")

    assert [entry.evaluation_id for entry in evolution.history] == ["av-1"]
    assert len(evolution.timeline) == 1
    assert isinstance(evolution.comparison, NoPriorEvaluation)
    assert evolution.executive_summary is None


def test_client_evolution_compares_latest_two(service, repo, full_image_set):
    repo.create("cli-1", evaluation_id="av-1", created_at=JAN)
    repo.create("cli-1", evaluation_id="av-2", created_at=MAR)
    service.run_analysis("av-1", "cli-1", full_image_set[:1])
    service.run_analysis("av-2", "cli-1", full_image_set)

    evolution = service.get_client_evolution("cli-1")

    assert [entry.evaluation_id for entry in evolution.history] == ["av-2", "av-1"]
    assert [point.evaluation_id for point in evolution.timeline] == ["av-1", "av-2"]
    assert evolution.timeline[0].values["densidade_capilar"] == 53.0
    assert evolution.history[0].global_score == 10.0
    assert evolution.comparison.days_between_evaluations == 60
    assert evolution.comparison.evolution.status is EvolutionStatus.MELHORA
    assert evolution.executive_summary.startswith("Evolução melhora:")


def test_client_evolution_for_unknown_client(service):
    evolution = service.get_client_evolution("nobody")

    assert evolution.history == []
    assert evolution.timeline == []
    assert isinstance(evolution.comparison, NoPriorEvaluation)
