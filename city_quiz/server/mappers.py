"""Translation between engine objects and JSON-ready dictionaries."""

from __future__ import annotations

from city_quiz.core.markdown_renderer import renderer
from city_quiz.core.models import (
    Account,
    Participant,
    ProgressView,
    QuestionView,
    RankingEntry,
)


def account_to_dict(account: Account) -> dict[str, object]:
    return {"id": account.account_id, "username": account.display_name}


def ranking_entry_to_dict(entry: RankingEntry) -> dict[str, object]:
    return {
        "player_id": entry.account_id,
        "player_name": entry.display_name,
        "score": entry.score,
        "rank": entry.rank,
    }


def progress_to_dict(progress: ProgressView) -> dict[str, object]:
    return {
        "game_id": progress.game_id,
        "category": progress.category.value,
        "current_round": progress.current_round,
        "total_rounds": progress.total_rounds,
        "countdown_time": progress.countdown_seconds,
        "is_ended": progress.is_ended,
        "round_open": progress.round_open,
        "ranking": [ranking_entry_to_dict(entry) for entry in progress.ranking],
    }


def question_to_dict(question: QuestionView) -> dict[str, object]:
    return {
        "game_id": question.game_id,
        "round": question.round_number,
        "prompt": question.prompt,
        "prompt_html": renderer.render_fragment(question.prompt),
        "options": list(question.options),
        "image_url": question.image_url,
        "countdown_time": question.countdown_seconds,
    }


def participant_to_dict(participant: Participant) -> dict[str, object]:
    return {
        "player_id": participant.account_id,
        "player_name": participant.display_name,
        "score": participant.score,
        "joined_at": participant.joined_at.isoformat(),
    }
