"""
Rule-based transfer and visa eligibility scoring.

Scores are derived from verified minutes (club, international and video
evidence), international caps, league band and performance. The scoring
functions are pure and operate on ScoringData; collect_scoring_data() and
recalculate_player_scores() connect them to the database.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from django.db import transaction
from sports_reels.core.logging import get_logger
from sports_reels.db.models.compliance import EligibilityScore

logger = get_logger(__name__)

MINIMUM_MINUTES_REQUIRED = 800
GREEN_THRESHOLD = 800
YELLOW_THRESHOLD = 600

LEAGUE_BAND_MULTIPLIERS = {1: 1.0, 2: 0.9, 3: 0.75, 4: 0.5, 5: 0.25}
DEFAULT_LEAGUE_MULTIPLIER = 0.5

GREEN, YELLOW, RED = 'green', 'yellow', 'red'


@dataclass
class ScoringData:
    """Everything the rules look at for one player."""

    league_band: int = 3
    club_minutes_current_season: int = 0
    club_minutes_last_12_months: int = 0
    international_minutes: int = 0
    continental_games: int = 0
    market_value: float = 0.0
    has_agent: bool = False
    has_contract: bool = False
    # Caps recorded directly on the player, used when there are no records
    fallback_total_caps: int = 0
    fallback_senior_caps: int = 0
    fallback_goals: int = 0
    fallback_assists: int = 0
    # (current_season_minutes, goals, assists) per season, newest first
    season_metrics: List[tuple] = field(default_factory=list)
    # (team_level, caps) per international record
    international_records: List[tuple] = field(default_factory=list)
    video_minutes: List[int] = field(default_factory=list)
    insight_minutes: List[int] = field(default_factory=list)
    analysed_insights: int = 0


@dataclass
class VisaScore:
    score: int
    status: str
    breakdown: Dict[str, float]
    recommendations: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'status': self.status,
            'breakdown': self.breakdown,
            'recommendations': self.recommendations,
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_status(score: float) -> str:
    if score >= 60:
        return GREEN
    if score >= 35:
        return YELLOW
    return RED


def get_minutes_status(minutes: int) -> str:
    if minutes >= GREEN_THRESHOLD:
        return GREEN
    if minutes >= YELLOW_THRESHOLD:
        return YELLOW
    return RED


def league_band_multiplier(band: Optional[int]) -> float:
    return LEAGUE_BAND_MULTIPLIERS.get(band, DEFAULT_LEAGUE_MULTIPLIER)


def club_minutes(data: ScoringData) -> int:
    recorded = data.club_minutes_current_season + data.club_minutes_last_12_months
    from_metrics = sum(m[0] for m in data.season_metrics)
    return max(recorded, from_metrics)


def caps(data: ScoringData) -> Dict[str, int]:
    if not data.international_records:
        return {'total': data.fallback_total_caps, 'senior': data.fallback_senior_caps}
    total = sum(c for _, c in data.international_records)
    senior = sum(c for level, c in data.international_records if level == 'senior')
    return {'total': total, 'senior': senior}


def international_minutes(data: ScoringData) -> int:
    return max(data.international_minutes, caps(data)['total'] * 45)


def video_minutes(data: ScoringData) -> int:
    return max(sum(data.video_minutes), sum(data.insight_minutes))


def total_minutes(data: ScoringData) -> int:
    return club_minutes(data) + international_minutes(data) + video_minutes(data)


def latest_goals_and_assists(data: ScoringData) -> Optional[int]:
    """Goals plus assists of the newest season; None without any stats."""
    if data.season_metrics:
        _, goals, assists = data.season_metrics[0]
        return goals + assists
    if data.fallback_goals or data.fallback_assists:
        return data.fallback_goals + data.fallback_assists
    return None


def calculate_schengen_score(data: ScoringData) -> VisaScore:
    minutes = total_minutes(data)
    total_caps = caps(data)['total']

    minutes_score = min(40.0, minutes / MINIMUM_MINUTES_REQUIRED * 40)
    international_score = min(30.0, total_caps * 3.0)
    league_score = 20 * league_band_multiplier(data.league_band)
    goals_assists = latest_goals_and_assists(data)
    performance_score = min(10.0, goals_assists * 0.5) if goals_assists is not None else 0.0

    score = round_half_up(minutes_score + international_score + league_score + performance_score)

    recommendations = []
    if minutes < MINIMUM_MINUTES_REQUIRED:
        recommendations.append(
            f"Play {MINIMUM_MINUTES_REQUIRED - minutes} more minutes to reach minimum threshold"
        )
    if total_caps < 5:
        recommendations.append(f"Earn {5 - total_caps} more international caps to strengthen application")

    return VisaScore(
        score=score,
        status=get_status(score),
        breakdown={
            'minutes_score': minutes_score,
            'international_score': international_score,
            'league_score': league_score,
            'performance_score': performance_score,
        },
        recommendations=recommendations,
    )


def calculate_o1_score(data: ScoringData) -> VisaScore:
    minutes = total_minutes(data)
    senior_caps = caps(data)['senior']
    market_value = data.market_value or 0.0

    has_recognition = market_value > 1_000_000
    recognition_score = 35.0 if has_recognition else min(35.0, market_value / 50_000)
    international_score = min(30.0, senior_caps * 2.0 + data.continental_games * 3.0)
    market_score = min(20.0, market_value / 5_000_000 * 20)
    bonus = 5 if minutes >= MINIMUM_MINUTES_REQUIRED else 0
    performance_score = min(15.0, data.analysed_insights * 2.0 + bonus)

    score = round_half_up(recognition_score + international_score + market_score + performance_score)

    recommendations = []
    if not has_recognition:
        recommendations.append("Increase market value or obtain recognition/awards for extraordinary ability")
    if senior_caps < 10:
        recommendations.append(f"Earn {10 - senior_caps} more senior international caps")
    if minutes < MINIMUM_MINUTES_REQUIRED:
        recommendations.append(f"Record {MINIMUM_MINUTES_REQUIRED - minutes} more verified minutes")

    return VisaScore(
        score=score,
        status=get_status(score),
        breakdown={
            'minutes_score': performance_score,
            'international_score': international_score,
            'league_score': market_score,
            'performance_score': recognition_score,
        },
        recommendations=recommendations,
    )


def calculate_p1_score(data: ScoringData) -> VisaScore:
    minutes = total_minutes(data)
    video_count = len(data.video_minutes)

    minutes_score = min(40.0, minutes / MINIMUM_MINUTES_REQUIRED * 40)
    league_score = 25 * league_band_multiplier(data.league_band)
    video_score = min(20.0, video_count * 4.0)
    validation_score = (7.5 if data.has_agent else 0.0) + (7.5 if data.has_contract else 0.0)

    score = round_half_up(minutes_score + league_score + video_score + validation_score)

    recommendations = []
    if minutes < MINIMUM_MINUTES_REQUIRED:
        recommendations.append(f"Record {MINIMUM_MINUTES_REQUIRED - minutes} more professional minutes")
    if not data.has_agent:
        recommendations.append("Register an agent contact for validation")
    if video_count < 5:
        recommendations.append(f"Upload {5 - video_count} more performance videos")

    return VisaScore(
        score=score,
        status=get_status(score),
        breakdown={
            'minutes_score': minutes_score,
            'international_score': 0.0,
            'league_score': league_score,
            'performance_score': video_score + validation_score,
        },
        recommendations=recommendations,
    )


def _tiered_points(value: int, tiers) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


def calculate_uk_gbe_score(data: ScoringData) -> VisaScore:
    """
    UK Governing Body Endorsement points, normalised to 0-100.

    Status follows the raw points: 15+ green, 10+ yellow.
    """
    minutes = total_minutes(data)
    domestic_minutes = club_minutes(data)
    senior_caps = caps(data)['senior']

    national_team_points = _tiered_points(senior_caps, ((75, 15), (50, 12), (30, 10), (15, 8), (5, 5), (1, 3)))
    club_league_points = {1: 15, 2: 12, 3: 8, 4: 4}.get(data.league_band, 2)
    continental_points = _tiered_points(data.continental_games, ((20, 10), (10, 7), (5, 4), (1, 2)))
    minutes_points = _tiered_points(domestic_minutes, ((1800, 10), (1200, 7), (600, 4), (300, 2)))

    points = national_team_points + club_league_points + continental_points + minutes_points
    if points >= 15:
        status = GREEN
    elif points >= 10:
        status = YELLOW
    else:
        status = RED

    recommendations = []
    if points < 15:
        recommendations.append(f"Need {15 - points} more GBE points to qualify automatically")
        if senior_caps < 5:
            recommendations.append(f"Earn {5 - senior_caps} senior international caps (+5 points)")
        if domestic_minutes < 600:
            recommendations.append(
                f"Play {600 - domestic_minutes} more domestic league minutes (+4 points at 600 mins)"
            )
        if minutes < MINIMUM_MINUTES_REQUIRED:
            recommendations.append(f"Record {MINIMUM_MINUTES_REQUIRED - minutes} more verified minutes")

    return VisaScore(
        score=round_half_up(points / 50 * 100),
        status=status,
        breakdown={
            'minutes_score': minutes_points * 2.5,
            'international_score': national_team_points * 2.0,
            'league_score': club_league_points * 2.5,
            'performance_score': continental_points * 2.5,
            'gbe_points': points,
        },
        recommendations=recommendations,
    )


def calculate_esc_score(data: ScoringData, gbe: VisaScore) -> VisaScore:
    """
    UK Elite Significance Criteria; only assessed when GBE is yellow.
    """
    if gbe.status != YELLOW:
        qualifies = gbe.status == GREEN
        return VisaScore(
            score=100 if qualifies else 0,
            status=GREEN if qualifies else RED,
            breakdown=dict(gbe.breakdown),
            recommendations=(
                ["Player qualifies via standard GBE route"] if qualifies
                else ["Player must first reach GBE yellow zone (10+ points) for ESC consideration"]
            ),
        )

    minutes = total_minutes(data)
    senior_caps = caps(data)['senior']
    video_count = len(data.video_minutes)

    score = 50
    score += _tiered_points(senior_caps, ((3, 15), (1, 10)))
    score += _tiered_points(minutes, ((MINIMUM_MINUTES_REQUIRED, 15), (500, 10)))
    score += _tiered_points(video_count, ((10, 10), (5, 7), (3, 4)))
    goals_assists = latest_goals_and_assists(data)
    if goals_assists is not None:
        score += _tiered_points(goals_assists, ((15, 10), (10, 7), (5, 4)))
    score = min(100, score)

    recommendations = []
    if senior_caps < 3:
        recommendations.append(f"Earn {3 - senior_caps} more senior caps to strengthen ESC case")
    if minutes < MINIMUM_MINUTES_REQUIRED:
        recommendations.append(f"Record {MINIMUM_MINUTES_REQUIRED - minutes} more verified minutes")
    if video_count < 5:
        recommendations.append(f"Upload {5 - video_count} more video evidence clips")

    return VisaScore(
        score=score,
        status=get_status(score),
        breakdown=dict(gbe.breakdown),
        recommendations=recommendations,
    )


def calculate_transfer_eligibility(data: ScoringData) -> Dict[str, Any]:
    """
    Full assessment across all rule-based visa routes.

    Returns:
        Dict with minutes and caps totals, overall_status, one entry per
        route (schengen, o1, p1, uk_gbe, esc), minutes_needed, caps_needed
        and at most five deduplicated recommendations.
    """
    club = club_minutes(data)
    international = international_minutes(data)
    video = video_minutes(data)
    verified = club + international + video
    cap_totals = caps(data)

    schengen = calculate_schengen_score(data)
    o1 = calculate_o1_score(data)
    p1 = calculate_p1_score(data)
    uk_gbe = calculate_uk_gbe_score(data)
    esc = calculate_esc_score(data, uk_gbe)

    best = max(schengen.score, o1.score, p1.score, uk_gbe.score, esc.score)
    if verified >= GREEN_THRESHOLD and best >= 60:
        overall_status = GREEN
    elif verified >= YELLOW_THRESHOLD or best >= 35:
        overall_status = YELLOW
    else:
        overall_status = RED

    minutes_needed = max(0, MINIMUM_MINUTES_REQUIRED - verified)
    caps_needed = 0
    if uk_gbe.status != GREEN and cap_totals['senior'] < 5:
        caps_needed = 5 - cap_totals['senior']

    recommendations: List[str] = []
    if minutes_needed > 0:
        recommendations.append(
            f"Play {minutes_needed} more minutes to reach minimum {MINIMUM_MINUTES_REQUIRED} minutes"
        )
    if caps_needed > 0:
        recommendations.append(f"Earn {caps_needed} more senior international caps for UK GBE eligibility")
    for route in (schengen, o1, p1, uk_gbe, esc):
        for recommendation in route.recommendations:
            if recommendation not in recommendations:
                recommendations.append(recommendation)

    return {
        'total_minutes_verified': verified,
        'club_minutes': club,
        'international_minutes': international,
        'video_minutes': video,
        'minutes_status': get_minutes_status(verified),
        'total_caps': cap_totals['total'],
        'senior_caps': cap_totals['senior'],
        'continental_appearances': data.continental_games,
        'overall_status': overall_status,
        'schengen': schengen.to_dict(),
        'o1': o1.to_dict(),
        'p1': p1.to_dict(),
        'uk_gbe': uk_gbe.to_dict(),
        'esc': esc.to_dict(),
        'esc_eligible': uk_gbe.status == YELLOW,
        'minutes_needed': minutes_needed,
        'caps_needed': caps_needed,
        'recommendations': recommendations[:5],
    }


def collect_scoring_data(player) -> ScoringData:
    """Load a player's metrics, records, videos and insights into ScoringData."""
    metrics = list(player.metrics.order_by('-season'))
    records = list(player.international_records.all())
    videos = list(player.videos.all())
    insights = list(player.video_insights.all())

    return ScoringData(
        league_band=player.league_band,
        club_minutes_current_season=player.club_minutes_current_season,
        club_minutes_last_12_months=player.club_minutes_last_12_months,
        international_minutes=player.international_minutes,
        continental_games=player.continental_games,
        market_value=player.market_value or 0.0,
        has_agent=bool(player.agent_name),
        has_contract=player.contract_end_date is not None,
        fallback_total_caps=player.international_caps or player.national_team_caps,
        fallback_senior_caps=player.national_team_caps,
        fallback_goals=player.goals,
        fallback_assists=player.assists,
        season_metrics=[(m.current_season_minutes, m.goals, m.assists) for m in metrics],
        international_records=[(r.team_level, r.caps) for r in records],
        video_minutes=[v.minutes_played or 0 for v in videos],
        insight_minutes=[i.minutes_played or 0 for i in insights],
        analysed_insights=sum(1 for i in insights if i.ai_analysis),
    )


def assess_player(player) -> Dict[str, Any]:
    return calculate_transfer_eligibility(collect_scoring_data(player))


# (assessment key, EligibilityScore.visa_type, Player field or None)
ROUTES = (
    ('schengen', 'schengen_sports', 'schengen_score'),
    ('uk_gbe', 'uk_gbe', 'uk_gbe_score'),
    ('esc', 'uk_esc', None),
    ('p1', 'us_p1', 'us_p1_score'),
    ('o1', 'us_o1', 'us_o1_score'),
)


def recalculate_player_scores(player) -> Dict[str, Any]:
    """
    Recompute and persist the rule-based scores of a player.

    Updates one EligibilityScore row per route and the player's score
    fields; Middle East and Asia scores are kept as recorded.

    Returns:
        The assessment dict from calculate_transfer_eligibility
    """
    assessment = assess_player(player)
    with transaction.atomic():
        for key, visa_type, player_field in ROUTES:
            result = assessment[key]
            EligibilityScore.objects.update_or_create(
                player=player,
                visa_type=visa_type,
                defaults={
                    'score': result['score'],
                    'status': result['status'],
                    'breakdown': result['breakdown'],
                    'recommendations': result['recommendations'],
                    'league_band_applied': player.league_band,
                },
            )
            if player_field:
                setattr(player, player_field, float(result['score']))
        player.refresh_overall_score()
        player.save(update_fields=[f for _, _, f in ROUTES if f] + ['overall_score', 'updated_at'])

    logger.info(
        f"Recalculated eligibility for player {player.id}: overall {player.overall_score} "
        f"({assessment['overall_status']})"
    )
    return assessment
