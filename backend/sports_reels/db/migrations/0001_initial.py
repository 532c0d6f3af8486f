# Initial compliance, token, federation and audit tables

import decimal
import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models
import sports_reels.db.models.embassy

VISA_TYPE_CHOICES = [
    ("schengen_sports", "Schengen Sports"),
    ("uk_gbe", "UK Governing Body Endorsement"),
    ("uk_esc", "UK Elite Significance Criteria"),
    ("us_p1", "US P-1"),
    ("us_o1", "US O-1"),
    ("fifa_transfer", "FIFA Transfer"),
    ("middle_east", "Middle East"),
    ("asia_sports", "Asia Sports"),
]


def big_id():
    return ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID"))


def uuid_id():
    return ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False))


def user_fk(related_name, blank=False):
    return models.ForeignKey(
        blank=blank,
        null=True,
        on_delete=django.db.models.deletion.SET_NULL,
        related_name=related_name,
        to=settings.AUTH_USER_MODEL,
    )


def player_fk(related_name):
    return models.ForeignKey(
        on_delete=django.db.models.deletion.CASCADE,
        related_name=related_name,
        to="db.player",
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("account", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        # Players
        migrations.CreateModel(
            name="Player",
            fields=[
                uuid_id(),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("date_of_birth", models.DateField(blank=True, null=True)),
                ("position", models.CharField(blank=True, default="", max_length=50)),
                ("nationality", models.CharField(max_length=100)),
                ("second_nationality", models.CharField(blank=True, default="", max_length=100)),
                ("current_club_name", models.CharField(blank=True, default="", max_length=200)),
                ("current_league", models.CharField(blank=True, default="", max_length=200)),
                ("league_band", models.PositiveSmallIntegerField(default=3)),
                ("market_value", models.FloatField(blank=True, null=True)),
                ("contract_end_date", models.DateField(blank=True, null=True)),
                ("agent_name", models.CharField(blank=True, default="", max_length=200)),
                ("national_team_caps", models.PositiveIntegerField(default=0)),
                ("international_caps", models.PositiveIntegerField(default=0)),
                ("continental_games", models.PositiveIntegerField(default=0)),
                ("club_minutes_current_season", models.PositiveIntegerField(default=0)),
                ("club_minutes_last_12_months", models.PositiveIntegerField(default=0)),
                ("international_minutes", models.PositiveIntegerField(default=0)),
                ("total_career_minutes", models.PositiveIntegerField(default=0)),
                ("goals", models.PositiveIntegerField(default=0)),
                ("assists", models.PositiveIntegerField(default=0)),
                ("medical_data_available", models.BooleanField(default=False)),
                ("gps_data_available", models.BooleanField(default=False)),
                ("schengen_score", models.FloatField(blank=True, null=True)),
                ("uk_gbe_score", models.FloatField(blank=True, null=True)),
                ("us_p1_score", models.FloatField(blank=True, null=True)),
                ("us_o1_score", models.FloatField(blank=True, null=True)),
                ("middle_east_score", models.FloatField(blank=True, null=True)),
                ("asia_score", models.FloatField(blank=True, null=True)),
                ("overall_score", models.FloatField(blank=True, null=True)),
                ("published_to_scouts", models.BooleanField(db_index=True, default=False)),
                (
                    "team",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="players",
                        to="account.team",
                    ),
                ),
            ],
            options={
                "db_table": "players",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["team", "created_at"], name="players_team_created_idx"),
                    models.Index(fields=["last_name", "first_name"], name="players_name_idx"),
                    models.Index(fields=["nationality"], name="players_nationality_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("league_band__gte", 1), ("league_band__lte", 5)),
                        name="players_league_band_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PlayerMetrics",
            fields=[
                big_id(),
                ("season", models.CharField(max_length=20)),
                ("current_season_minutes", models.PositiveIntegerField(default=0)),
                ("games_played", models.PositiveIntegerField(default=0)),
                ("goals", models.PositiveIntegerField(default=0)),
                ("assists", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("player", player_fk("metrics")),
            ],
            options={
                "db_table": "player_metrics",
                "ordering": ["-season"],
                "constraints": [
                    models.UniqueConstraint(fields=("player", "season"), name="player_metrics_unique_season"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InternationalRecord",
            fields=[
                big_id(),
                ("national_team", models.CharField(max_length=100)),
                (
                    "team_level",
                    models.CharField(
                        choices=[
                            ("senior", "Senior"),
                            ("u23", "Under 23"),
                            ("u21", "Under 21"),
                            ("u20", "Under 20"),
                            ("u17", "Under 17"),
                        ],
                        default="senior",
                        max_length=10,
                    ),
                ),
                ("caps", models.PositiveIntegerField(default=0)),
                ("goals", models.PositiveIntegerField(default=0)),
                ("debut_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("player", player_fk("international_records")),
            ],
            options={
                "db_table": "international_records",
                "ordering": ["team_level", "-caps"],
            },
        ),
        # Videos
        migrations.CreateModel(
            name="Video",
            fields=[
                uuid_id(),
                ("title", models.CharField(max_length=255)),
                (
                    "source",
                    models.CharField(
                        choices=[
                            ("manual", "Manual upload"),
                            ("wyscout", "Wyscout"),
                            ("transfermarkt", "Transfermarkt"),
                            ("veo", "Veo"),
                        ],
                        default="manual",
                        max_length=20,
                    ),
                ),
                ("file_url", models.CharField(blank=True, default="", max_length=500)),
                ("thumbnail_url", models.CharField(blank=True, default="", max_length=500)),
                ("duration", models.PositiveIntegerField(blank=True, null=True)),
                ("match_date", models.DateField(blank=True, null=True)),
                ("competition", models.CharField(blank=True, default="", max_length=200)),
                ("opponent", models.CharField(blank=True, default="", max_length=200)),
                ("minutes_played", models.PositiveIntegerField(default=0)),
                ("processed", models.BooleanField(default=False)),
                ("upload_date", models.DateTimeField(auto_now_add=True)),
                ("player", player_fk("videos")),
                (
                    "team",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="videos",
                        to="account.team",
                    ),
                ),
            ],
            options={
                "db_table": "videos",
                "ordering": ["-upload_date"],
                "indexes": [
                    models.Index(fields=["player", "upload_date"], name="videos_player_uploaded_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="VideoInsight",
            fields=[
                big_id(),
                ("minutes_played", models.PositiveIntegerField(default=0)),
                ("distance_covered_km", models.FloatField(blank=True, null=True)),
                ("sprint_count", models.PositiveIntegerField(blank=True, null=True)),
                ("passes_attempted", models.PositiveIntegerField(blank=True, null=True)),
                ("passes_completed", models.PositiveIntegerField(blank=True, null=True)),
                ("shots_on_target", models.PositiveIntegerField(blank=True, null=True)),
                ("tackles", models.PositiveIntegerField(blank=True, null=True)),
                ("interceptions", models.PositiveIntegerField(blank=True, null=True)),
                ("duels_won", models.PositiveIntegerField(blank=True, null=True)),
                ("rating", models.FloatField(blank=True, null=True)),
                ("strengths", models.JSONField(blank=True, default=list)),
                ("improvements", models.JSONField(blank=True, default=list)),
                ("ai_analysis", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("player", player_fk("video_insights")),
                (
                    "video",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="insights",
                        to="db.video",
                    ),
                ),
            ],
            options={
                "db_table": "video_insights",
                "ordering": ["-created_at"],
            },
        ),
        # Compliance
        migrations.CreateModel(
            name="EligibilityScore",
            fields=[
                big_id(),
                ("visa_type", models.CharField(choices=VISA_TYPE_CHOICES, max_length=30)),
                ("score", models.FloatField()),
                (
                    "status",
                    models.CharField(
                        choices=[("green", "Eligible"), ("yellow", "Conditional"), ("red", "Ineligible")],
                        max_length=10,
                    ),
                ),
                ("breakdown", models.JSONField(blank=True, default=dict)),
                ("recommendations", models.JSONField(blank=True, default=list)),
                ("league_band_applied", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("calculated_at", models.DateTimeField(auto_now=True)),
                ("player", player_fk("eligibility_scores")),
            ],
            options={
                "db_table": "eligibility_scores",
                "ordering": ["visa_type"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("player", "visa_type"),
                        name="eligibility_scores_player_visa_unique",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ComplianceOrder",
            fields=[
                uuid_id(),
                ("visa_type", models.CharField(choices=VISA_TYPE_CHOICES, max_length=30)),
                ("target_country", models.CharField(max_length=100)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending_payment", "Pending Payment"),
                            ("paid", "Paid"),
                            ("completed", "Completed"),
                        ],
                        default="pending_payment",
                        max_length=20,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("49.99"), max_digits=8)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("payment_reference", models.CharField(blank=True, default="", max_length=100)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("player", player_fk("compliance_orders")),
                ("requested_by", user_fk("compliance_orders")),
            ],
            options={
                "db_table": "compliance_orders",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ComplianceDocument",
            fields=[
                uuid_id(),
                ("document_type", models.CharField(default="consular_summary", max_length=50)),
                ("visa_type", models.CharField(blank=True, choices=VISA_TYPE_CHOICES, default="", max_length=30)),
                ("target_country", models.CharField(blank=True, default="", max_length=100)),
                ("date_range_start", models.DateField()),
                ("date_range_end", models.DateField()),
                ("eligibility_snapshot", models.JSONField(default=dict)),
                ("eligibility_score", models.FloatField(blank=True, null=True)),
                ("ai_summary", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("submitted", "Submitted"),
                            ("verified", "Verified"),
                            ("rejected", "Rejected"),
                        ],
                        db_index=True,
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("generated_at", models.DateTimeField(auto_now_add=True)),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                ("generated_by", user_fk("compliance_documents")),
                (
                    "order",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="document",
                        to="db.complianceorder",
                    ),
                ),
                ("player", player_fk("compliance_documents")),
            ],
            options={
                "db_table": "compliance_documents",
                "ordering": ["-generated_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("date_range_start__lte", models.F("date_range_end"))),
                        name="compliance_documents_date_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="EmbassyVerification",
            fields=[
                uuid_id(),
                ("embassy_country", models.CharField(db_index=True, max_length=100)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("under_review", "Under Review"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "verification_code",
                    models.CharField(
                        default=sports_reels.db.models.embassy.generate_verification_code,
                        max_length=20,
                        unique=True,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("submitted_at", models.DateTimeField(auto_now_add=True)),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                (
                    "document",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="verifications",
                        to="db.compliancedocument",
                    ),
                ),
                ("player", player_fk("embassy_verifications")),
                ("reviewed_by", user_fk("reviewed_verifications", blank=True)),
            ],
            options={
                "db_table": "embassy_verifications",
                "ordering": ["-submitted_at"],
            },
        ),
        # Scouting
        migrations.CreateModel(
            name="ScoutingInquiry",
            fields=[
                uuid_id(),
                ("buying_club_name", models.CharField(max_length=200)),
                ("selling_club_name", models.CharField(blank=True, default="", max_length=200)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("inquiry", "Inquiry"),
                            ("negotiation", "Negotiation"),
                            ("due_diligence", "Due Diligence"),
                            ("closed", "Closed"),
                        ],
                        db_index=True,
                        default="inquiry",
                        max_length=20,
                    ),
                ),
                ("compliance_score", models.FloatField(blank=True, null=True)),
                ("message", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", user_fk("scouting_inquiries")),
                ("player", player_fk("scouting_inquiries")),
            ],
            options={
                "db_table": "scouting_inquiries",
                "ordering": ["-created_at"],
                "verbose_name_plural": "Scouting inquiries",
            },
        ),
        migrations.CreateModel(
            name="InquiryMessage",
            fields=[
                big_id(),
                ("content", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "inquiry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="db.scoutinginquiry",
                    ),
                ),
                ("sender", user_fk("inquiry_messages")),
            ],
            options={
                "db_table": "inquiry_messages",
                "ordering": ["created_at"],
            },
        ),
        # Tokens
        migrations.CreateModel(
            name="TokenPack",
            fields=[
                big_id(),
                ("name", models.CharField(max_length=50, unique=True)),
                ("tokens", models.PositiveIntegerField()),
                ("price_cents", models.PositiveIntegerField()),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("is_active", models.BooleanField(default=True)),
                ("sort_order", models.PositiveSmallIntegerField(default=0)),
            ],
            options={
                "db_table": "token_packs",
                "ordering": ["sort_order", "tokens"],
            },
        ),
        migrations.CreateModel(
            name="TokenPurchase",
            fields=[
                uuid_id(),
                ("tokens", models.PositiveIntegerField()),
                ("amount_paid_cents", models.PositiveIntegerField()),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("payment_method", models.CharField(default="simulated", max_length=30)),
                ("payment_reference", models.CharField(blank=True, default="", max_length=100)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("completed", "Completed"), ("failed", "Failed")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "pack",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchases",
                        to="db.tokenpack",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="token_purchases",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "token_purchases",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="TokenBalance",
            fields=[
                big_id(),
                ("balance", models.IntegerField(default=0)),
                ("lifetime_purchased", models.PositiveIntegerField(default=0)),
                ("lifetime_spent", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="token_balance",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "token_balances",
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("balance__gte", 0)),
                        name="token_balances_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="TokenTransaction",
            fields=[
                big_id(),
                ("type", models.CharField(choices=[("credit", "Credit"), ("debit", "Debit")], max_length=10)),
                ("amount", models.IntegerField()),
                ("action", models.CharField(max_length=50)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("player_id", models.UUIDField(blank=True, null=True)),
                ("video_id", models.UUIDField(blank=True, null=True)),
                ("balance_after", models.IntegerField()),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "purchase",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transactions",
                        to="db.tokenpurchase",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="token_transactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "token_transactions",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["user", "created_at"], name="token_tx_user_created_idx"),
                ],
            },
        ),
        # Federation
        migrations.CreateModel(
            name="FederationProfile",
            fields=[
                big_id(),
                ("name", models.CharField(max_length=200)),
                ("country", models.CharField(max_length=100, unique=True)),
                ("region", models.CharField(blank=True, default="", max_length=100)),
                ("contact_email", models.EmailField(blank=True, default="", max_length=254)),
                ("default_fee", models.DecimalField(decimal_places=2, default=decimal.Decimal("150.00"), max_digits=10)),
                (
                    "platform_service_charge",
                    models.DecimalField(decimal_places=2, default=decimal.Decimal("25.00"), max_digits=10),
                ),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "federation_profiles",
                "ordering": ["country"],
            },
        ),
        migrations.CreateModel(
            name="FederationFeeSchedule",
            fields=[
                big_id(),
                ("country", models.CharField(db_index=True, max_length=100)),
                ("base_fee", models.DecimalField(decimal_places=2, default=decimal.Decimal("150.00"), max_digits=10)),
                (
                    "platform_service_charge",
                    models.DecimalField(decimal_places=2, default=decimal.Decimal("25.00"), max_digits=10),
                ),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("effective_from", models.DateField(blank=True, null=True)),
                ("effective_to", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "federation",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fee_schedules",
                        to="db.federationprofile",
                    ),
                ),
            ],
            options={
                "db_table": "federation_fee_schedules",
                "ordering": ["country", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="FederationLetterRequest",
            fields=[
                uuid_id(),
                ("request_number", models.CharField(max_length=40, unique=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("submitted", "Submitted"),
                            ("processing", "Processing"),
                            ("issued", "Issued"),
                            ("rejected", "Rejected"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("athlete_full_name", models.CharField(max_length=200)),
                ("athlete_nationality", models.CharField(max_length=100)),
                ("target_club_name", models.CharField(max_length=200)),
                ("target_club_country", models.CharField(max_length=100)),
                ("transfer_type", models.CharField(default="permanent", max_length=30)),
                ("invitation_letter_path", models.CharField(blank=True, default="", max_length=500)),
                ("notes", models.TextField(blank=True, default="")),
                ("fee_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("150.00"), max_digits=10)),
                ("service_charge", models.DecimalField(decimal_places=2, default=decimal.Decimal("25.00"), max_digits=10)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("unpaid", "Unpaid"), ("paid", "Paid")],
                        default="unpaid",
                        max_length=10,
                    ),
                ),
                ("payment_reference", models.CharField(blank=True, default="", max_length=100)),
                ("payment_confirmed_at", models.DateTimeField(blank=True, null=True)),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
                ("issued_document_path", models.CharField(blank=True, default="", max_length=500)),
                ("issued_at", models.DateTimeField(blank=True, null=True)),
                ("rejection_reason", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "federation",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="letter_requests",
                        to="db.federationprofile",
                    ),
                ),
                ("player", player_fk("federation_requests")),
                ("processed_by", user_fk("processed_federation_requests", blank=True)),
                ("submitted_by", user_fk("federation_requests")),
                (
                    "team",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="federation_requests",
                        to="account.team",
                    ),
                ),
            ],
            options={
                "db_table": "federation_letter_requests",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="FederationRequestActivity",
            fields=[
                big_id(),
                ("activity_type", models.CharField(max_length=50)),
                ("description", models.TextField(blank=True, default="")),
                ("previous_status", models.CharField(blank=True, default="", max_length=20)),
                ("new_status", models.CharField(blank=True, default="", max_length=20)),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                ("actor", user_fk("+", blank=True)),
                (
                    "request",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to="db.federationletterrequest",
                    ),
                ),
            ],
            options={
                "db_table": "federation_request_activities",
                "ordering": ["timestamp", "id"],
            },
        ),
        migrations.CreateModel(
            name="FederationPayment",
            fields=[
                big_id(),
                (
                    "fee_type",
                    models.CharField(
                        choices=[
                            ("federation_fee", "Federation Fee"),
                            ("service_charge", "Platform Service Charge"),
                        ],
                        max_length=20,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("status", models.CharField(default="completed", max_length=20)),
                ("transaction_reference", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "federation",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payments",
                        to="db.federationprofile",
                    ),
                ),
                (
                    "request",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payments",
                        to="db.federationletterrequest",
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="federation_payments",
                        to="account.team",
                    ),
                ),
            ],
            options={
                "db_table": "federation_payments",
                "ordering": ["-created_at", "-id"],
            },
        ),
        # Audit
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                big_id(),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("auth", "Authentication"),
                            ("player", "Player"),
                            ("video", "Video"),
                            ("compliance", "Compliance"),
                            ("embassy", "Embassy"),
                            ("scouting", "Scouting"),
                            ("tokens", "Tokens"),
                            ("federation", "Federation"),
                            ("admin", "Administration"),
                        ],
                        db_index=True,
                        max_length=20,
                    ),
                ),
                ("action", models.CharField(max_length=100)),
                ("entity_type", models.CharField(blank=True, default="", max_length=50)),
                ("entity_id", models.CharField(blank=True, default="", max_length=64)),
                ("actor_role", models.CharField(blank=True, default="", max_length=30)),
                ("description", models.TextField(blank=True, default="")),
                ("details", models.JSONField(blank=True, default=dict)),
                (
                    "severity",
                    models.CharField(
                        choices=[("info", "Info"), ("warning", "Warning"), ("critical", "Critical")],
                        default="info",
                        max_length=10,
                    ),
                ),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("timestamp", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("actor", user_fk("audit_logs", blank=True)),
            ],
            options={
                "db_table": "audit_logs",
                "ordering": ["-timestamp", "-id"],
                "indexes": [
                    models.Index(fields=["category", "timestamp"], name="audit_logs_category_ts_idx"),
                ],
            },
        ),
    ]
