"""
LLM-backed video analysis and consular summary generation.
"""
import json
from typing import Any, Dict, Optional
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, Field, ValidationError as SchemaValidationError
from sports_reels.core import config
from sports_reels.core.errors import ServiceUnavailableError
from sports_reels.core.logging import get_logger
from sports_reels.observability.tracing import build_run_config

logger = get_logger(__name__)

VIDEO_ANALYSIS_SYSTEM_PROMPT = """You are a football performance analyst. Given the match metadata of a
player's video, estimate the player's match metrics.

Respond in JSON format only:
{
    "minutes_played": integer,
    "distance_covered_km": number,
    "sprint_count": integer,
    "passes_attempted": integer,
    "passes_completed": integer,
    "shots_on_target": integer,
    "tackles": integer,
    "interceptions": integer,
    "duels_won": integer,
    "performance_rating": number between 1 and 10,
    "strengths": [string],
    "improvements": [string],
    "summary": "brief performance summary"
}

Rules:
- passes_completed must not exceed passes_attempted
- minutes_played must not exceed the recorded minutes when they are given
- Always return valid JSON"""

CONSULAR_SUMMARY_SYSTEM_PROMPT = """You write formal compliance summaries that football clubs submit to
embassies and consulates with work visa applications for professional players.
Write in a neutral, factual register. Use only the data provided; state
"Not provided" for missing data. Do not invent achievements."""


class VideoAnalysisResult(BaseModel):
    """Structured metrics returned by the analysis model."""

    minutes_played: int = Field(0, ge=0, le=150)
    distance_covered_km: Optional[float] = Field(None, ge=0, le=20)
    sprint_count: int = Field(0, ge=0)
    passes_attempted: int = Field(0, ge=0)
    passes_completed: int = Field(0, ge=0)
    shots_on_target: int = Field(0, ge=0)
    tackles: int = Field(0, ge=0)
    interceptions: int = Field(0, ge=0)
    duels_won: int = Field(0, ge=0)
    performance_rating: Optional[float] = Field(None, ge=1, le=10)
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    summary: str = ''


def llm_configured() -> bool:
    return bool(config.OPENAI_API_KEY)


def _get_llm(temperature: float = 0) -> ChatOpenAI:
    if not llm_configured():
        raise ServiceUnavailableError('AI analysis is not configured')
    return ChatOpenAI(
        model=config.OPENAI_MODEL,
        api_key=config.OPENAI_API_KEY,
        temperature=temperature,
    )


def parse_json_content(content: str) -> Dict[str, Any]:
    """
    Parse a JSON object from a model answer, tolerating markdown fences.

    Raises:
        ValueError: if no JSON object can be decoded
    """
    text = content.strip()
    if text.startswith("```"):
        text = text.split("```")[1]
        if text.startswith("json"):
            text = text[4:]
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


def analyze_video(video, player, user_id: Optional[int] = None) -> VideoAnalysisResult:
    """
    Estimate match metrics for a video.

    Args:
        video: Video being analysed
        player: Player shown in the video
        user_id: Requesting user ID for tracing

    Returns:
        VideoAnalysisResult

    Raises:
        ServiceUnavailableError: if no model is configured or the answer is unusable
    """
    logger.info(f"[VIDEO_ANALYSIS] Analysing video {video.id} for player {player.id}")
    llm = _get_llm()

    messages = [
        SystemMessage(content=VIDEO_ANALYSIS_SYSTEM_PROMPT),
        HumanMessage(content=(
            f"Player: {player.full_name}\n"
            f"Position: {player.position or 'Unknown'}\n"
            f"Match: {video.title}\n"
            f"Duration (seconds): {video.duration or 'Unknown'}\n"
            f"Competition: {video.competition or 'Unknown'}\n"
            f"Opponent: {video.opponent or 'Unknown'}\n"
            f"Recorded minutes played: {video.minutes_played or 'Unknown'}"
        )),
    ]

    response = llm.invoke(
        messages,
        config=build_run_config('video_analysis', user_id=user_id, metadata={'video_id': video.id}),
    )

    try:
        result = VideoAnalysisResult(**parse_json_content(response.content))
    except (ValueError, TypeError, SchemaValidationError) as e:
        logger.error(f"[VIDEO_ANALYSIS] Unusable model answer for video {video.id}: {e}")
        raise ServiceUnavailableError('AI analysis returned an invalid result')

    if result.passes_completed > result.passes_attempted:
        result.passes_completed = result.passes_attempted
    if video.minutes_played and result.minutes_played > video.minutes_played:
        result.minutes_played = video.minutes_played

    logger.info(
        f"[VIDEO_ANALYSIS] Video {video.id}: {result.minutes_played} minutes, "
        f"rating {result.performance_rating}"
    )
    return result


def build_consular_summary_prompt(player, snapshot: Dict[str, Any], visa_type: str,
                                  target_country: str, date_range: tuple) -> str:
    latest = snapshot.get('latest_metrics') or {}
    assessment = snapshot.get('assessment') or {}
    return (
        "Generate a compliance document summary for embassy submission.\n\n"
        f"Player: {player.full_name}\n"
        f"Nationality: {player.nationality}\n"
        f"Position: {player.position or 'Not provided'}\n"
        f"Date of Birth: {player.date_of_birth or 'Not provided'}\n"
        f"Current Club: {player.current_club_name or 'Not provided'} "
        f"({player.current_league or 'league not provided'}, band {player.league_band})\n\n"
        f"Reporting period: {date_range[0]} to {date_range[1]}\n"
        "Performance Data:\n"
        f"- Verified minutes: {assessment.get('total_minutes_verified', 0)}\n"
        f"- Current season minutes: {latest.get('current_season_minutes', player.club_minutes_current_season)}\n"
        f"- Goals: {latest.get('goals', player.goals)}\n"
        f"- Assists: {latest.get('assists', player.assists)}\n"
        f"- Senior international caps: {assessment.get('senior_caps', 0)}\n"
        f"- Continental games: {player.continental_games}\n\n"
        f"Medical data available: {'Yes' if player.medical_data_available else 'No'}\n"
        f"GPS data available: {'Yes' if player.gps_data_available else 'No'}\n\n"
        f"Target visa: {visa_type or 'Not specified'}\n"
        f"Target country: {target_country or 'Not specified'}\n"
        f"Overall eligibility status: {assessment.get('overall_status', 'unknown')}\n\n"
        "Highlight the player's professional status, playing time, international "
        "representation, fitness data availability and a recommendation on visa eligibility."
    )


def fallback_consular_summary(player, snapshot: Dict[str, Any], visa_type: str, target_country: str) -> str:
    """Plain summary used when no model is configured."""
    assessment = snapshot.get('assessment') or {}
    lines = [
        f"Compliance summary for {player.full_name} ({player.nationality}).",
        f"Club: {player.current_club_name or 'Not provided'}, league band {player.league_band}.",
        f"Verified minutes: {assessment.get('total_minutes_verified', 0)}; "
        f"senior international caps: {assessment.get('senior_caps', 0)}.",
        f"Overall eligibility status: {assessment.get('overall_status', 'unknown')}.",
    ]
    if visa_type or target_country:
        lines.append(f"Requested route: {visa_type or 'unspecified'} for {target_country or 'unspecified country'}.")
    for recommendation in assessment.get('recommendations', []):
        lines.append(f"Outstanding: {recommendation}.")
    return "\n".join(lines)


def generate_consular_summary(player, snapshot: Dict[str, Any], visa_type: str = '',
                              target_country: str = '', date_range: tuple = ('', ''),
                              user_id: Optional[int] = None) -> str:
    """
    Write the consular summary text of a compliance document.

    Uses the model when configured, otherwise a plain rule-based summary.
    """
    if not llm_configured():
        return fallback_consular_summary(player, snapshot, visa_type, target_country)

    llm = _get_llm(temperature=0.2)
    messages = [
        SystemMessage(content=CONSULAR_SUMMARY_SYSTEM_PROMPT),
        HumanMessage(content=build_consular_summary_prompt(player, snapshot, visa_type, target_country, date_range)),
    ]
    response = llm.invoke(
        messages,
        config=build_run_config('consular_summary', user_id=user_id, metadata={'player_id': player.id}),
    )
    summary = (response.content or '').strip()
    logger.info(f"[CONSULAR_SUMMARY] Generated {len(summary)} chars for player {player.id}")
    return summary
