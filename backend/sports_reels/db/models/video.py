"""
Match videos and the insights extracted from them.
"""
import uuid
from django.db import models


class Video(models.Model):
    """
    An uploaded or partner-imported match video.

    Created when the client finishes a direct upload; `processed` flips to
    True once analysis has stored a VideoInsight.
    """

    class Source(models.TextChoices):
        MANUAL = 'manual', 'Manual upload'
        WYSCOUT = 'wyscout', 'Wyscout'
        TRANSFERMARKT = 'transfermarkt', 'Transfermarkt'
        VEO = 'veo', 'Veo'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    player = models.ForeignKey('db.Player', on_delete=models.CASCADE, related_name='videos')
    team = models.ForeignKey(
        'account.Team',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='videos',
    )
    title = models.CharField(max_length=255)
    source = models.CharField(max_length=20, choices=Source.choices, default=Source.MANUAL)
    file_url = models.CharField(max_length=500, blank=True, default='')  # object path
    thumbnail_url = models.CharField(max_length=500, blank=True, default='')
    duration = models.PositiveIntegerField(null=True, blank=True)  # seconds
    match_date = models.DateField(null=True, blank=True)
    competition = models.CharField(max_length=200, blank=True, default='')
    opponent = models.CharField(max_length=200, blank=True, default='')
    minutes_played = models.PositiveIntegerField(default=0)
    processed = models.BooleanField(default=False)
    upload_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'videos'
        ordering = ['-upload_date']
        indexes = [
            models.Index(fields=['player', 'upload_date'], name='videos_player_uploaded_idx'),
        ]

    def __str__(self):
        return self.title


class VideoInsight(models.Model):
    """Performance metrics extracted from one video."""

    video = models.ForeignKey(Video, on_delete=models.CASCADE, related_name='insights')
    player = models.ForeignKey('db.Player', on_delete=models.CASCADE, related_name='video_insights')
    minutes_played = models.PositiveIntegerField(default=0)
    distance_covered_km = models.FloatField(null=True, blank=True)
    sprint_count = models.PositiveIntegerField(null=True, blank=True)
    passes_attempted = models.PositiveIntegerField(null=True, blank=True)
    passes_completed = models.PositiveIntegerField(null=True, blank=True)
    shots_on_target = models.PositiveIntegerField(null=True, blank=True)
    tackles = models.PositiveIntegerField(null=True, blank=True)
    interceptions = models.PositiveIntegerField(null=True, blank=True)
    duels_won = models.PositiveIntegerField(null=True, blank=True)
    rating = models.FloatField(null=True, blank=True)
    strengths = models.JSONField(default=list, blank=True)
    improvements = models.JSONField(default=list, blank=True)
    ai_analysis = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'video_insights'
        ordering = ['-created_at']

    def __str__(self):
        return f"Insight for {self.video_id}"
