"""
Player record with the inputs and outputs of eligibility scoring.
"""
import uuid
from django.db import models


class Player(models.Model):
    """
    Central player record.

    Minutes, caps and league band feed the eligibility rules; the six visa
    scores and the overall score are written back by the scoring service.
    """

    SCORE_FIELDS = (
        'schengen_score',
        'uk_gbe_score',
        'us_p1_score',
        'us_o1_score',
        'middle_east_score',
        'asia_score',
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    team = models.ForeignKey(
        'account.Team',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='players',
        db_index=True,
    )

    # Identity
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    date_of_birth = models.DateField(null=True, blank=True)
    position = models.CharField(max_length=50, blank=True, default='')
    nationality = models.CharField(max_length=100)
    second_nationality = models.CharField(max_length=100, blank=True, default='')

    # Club
    current_club_name = models.CharField(max_length=200, blank=True, default='')
    current_league = models.CharField(max_length=200, blank=True, default='')
    league_band = models.PositiveSmallIntegerField(default=3)
    market_value = models.FloatField(null=True, blank=True)  # EUR
    contract_end_date = models.DateField(null=True, blank=True)
    agent_name = models.CharField(max_length=200, blank=True, default='')

    # Appearances
    national_team_caps = models.PositiveIntegerField(default=0)
    international_caps = models.PositiveIntegerField(default=0)
    continental_games = models.PositiveIntegerField(default=0)
    club_minutes_current_season = models.PositiveIntegerField(default=0)
    club_minutes_last_12_months = models.PositiveIntegerField(default=0)
    international_minutes = models.PositiveIntegerField(default=0)
    total_career_minutes = models.PositiveIntegerField(default=0)
    goals = models.PositiveIntegerField(default=0)
    assists = models.PositiveIntegerField(default=0)

    medical_data_available = models.BooleanField(default=False)
    gps_data_available = models.BooleanField(default=False)

    # Eligibility scores (0-100)
    schengen_score = models.FloatField(null=True, blank=True)
    uk_gbe_score = models.FloatField(null=True, blank=True)
    us_p1_score = models.FloatField(null=True, blank=True)
    us_o1_score = models.FloatField(null=True, blank=True)
    middle_east_score = models.FloatField(null=True, blank=True)
    asia_score = models.FloatField(null=True, blank=True)
    overall_score = models.FloatField(null=True, blank=True)

    published_to_scouts = models.BooleanField(default=False, db_index=True)

    class Meta:
        db_table = 'players'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['team', 'created_at'], name='players_team_created_idx'),
            models.Index(fields=['last_name', 'first_name'], name='players_name_idx'),
            models.Index(fields=['nationality'], name='players_nationality_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(league_band__gte=1, league_band__lte=5),
                name='players_league_band_range',
            ),
        ]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def minutes_played(self) -> int:
        return self.club_minutes_current_season + self.club_minutes_last_12_months

    def recorded_scores(self):
        """Visa scores that have a value."""
        return [getattr(self, name) for name in self.SCORE_FIELDS if getattr(self, name) is not None]

    def refresh_overall_score(self):
        scores = self.recorded_scores()
        self.overall_score = round(sum(scores) / len(scores), 1) if scores else None


class PlayerMetrics(models.Model):
    """Per-season club statistics."""

    player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name='metrics')
    season = models.CharField(max_length=20)
    current_season_minutes = models.PositiveIntegerField(default=0)
    games_played = models.PositiveIntegerField(default=0)
    goals = models.PositiveIntegerField(default=0)
    assists = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'player_metrics'
        ordering = ['-season']
        constraints = [
            models.UniqueConstraint(fields=['player', 'season'], name='player_metrics_unique_season'),
        ]

    def __str__(self):
        return f"{self.player_id} {self.season}"


class InternationalRecord(models.Model):
    """National team appearances at one level."""

    class TeamLevel(models.TextChoices):
        SENIOR = 'senior', 'Senior'
        U23 = 'u23', 'Under 23'
        U21 = 'u21', 'Under 21'
        U20 = 'u20', 'Under 20'
        U17 = 'u17', 'Under 17'

    player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name='international_records')
    national_team = models.CharField(max_length=100)
    team_level = models.CharField(max_length=10, choices=TeamLevel.choices, default=TeamLevel.SENIOR)
    caps = models.PositiveIntegerField(default=0)
    goals = models.PositiveIntegerField(default=0)
    debut_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'international_records'
        ordering = ['team_level', '-caps']

    def __str__(self):
        return f"{self.national_team} {self.team_level} ({self.caps})"
