"""
Django admin configuration.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from sports_reels.account.models import Team, User
from sports_reels.db.models import (
    AuditLog,
    ComplianceDocument,
    EmbassyVerification,
    FederationFeeSchedule,
    FederationLetterRequest,
    FederationPayment,
    FederationProfile,
    Player,
    ScoutingInquiry,
    TokenBalance,
    TokenPack,
    Video,
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Email-based user admin."""
    list_display = ('email', 'role', 'team', 'embassy_country', 'is_staff', 'created_at')
    list_filter = ('role', 'is_staff', 'is_active')
    search_fields = ('email', 'first_name', 'last_name')
    ordering = ('email',)
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('first_name', 'last_name', 'role', 'team', 'embassy_country')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
    )
    add_fieldsets = (
        (None, {'classes': ('wide',), 'fields': ('email', 'role', 'password1', 'password2')}),
    )


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('name', 'club_name', 'country', 'league_band', 'created_at')
    search_fields = ('name', 'club_name')


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ('last_name', 'first_name', 'nationality', 'team', 'league_band', 'overall_score', 'published_to_scouts')
    list_filter = ('published_to_scouts', 'league_band')
    search_fields = ('first_name', 'last_name', 'current_club_name')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(Video)
class VideoAdmin(admin.ModelAdmin):
    list_display = ('title', 'player', 'source', 'minutes_played', 'processed', 'upload_date')
    list_filter = ('source', 'processed')
    search_fields = ('title', 'player__last_name')


@admin.register(ComplianceDocument)
class ComplianceDocumentAdmin(admin.ModelAdmin):
    list_display = ('id', 'player', 'visa_type', 'status', 'generated_at', 'submitted_at')
    list_filter = ('status', 'visa_type')


@admin.register(EmbassyVerification)
class EmbassyVerificationAdmin(admin.ModelAdmin):
    list_display = ('verification_code', 'player', 'embassy_country', 'status', 'submitted_at')
    list_filter = ('status', 'embassy_country')
    search_fields = ('verification_code',)


@admin.register(ScoutingInquiry)
class ScoutingInquiryAdmin(admin.ModelAdmin):
    list_display = ('player', 'buying_club_name', 'selling_club_name', 'status', 'created_at')
    list_filter = ('status',)


@admin.register(TokenBalance)
class TokenBalanceAdmin(admin.ModelAdmin):
    list_display = ('user', 'balance', 'lifetime_purchased', 'lifetime_spent', 'updated_at')
    search_fields = ('user__email',)


@admin.register(TokenPack)
class TokenPackAdmin(admin.ModelAdmin):
    list_display = ('name', 'tokens', 'price_cents', 'currency', 'is_active', 'sort_order')


@admin.register(FederationProfile)
class FederationProfileAdmin(admin.ModelAdmin):
    list_display = ('name', 'country', 'default_fee', 'platform_service_charge', 'is_active')


@admin.register(FederationFeeSchedule)
class FederationFeeScheduleAdmin(admin.ModelAdmin):
    list_display = ('country', 'federation', 'base_fee', 'platform_service_charge', 'is_active')
    list_filter = ('is_active',)


@admin.register(FederationLetterRequest)
class FederationLetterRequestAdmin(admin.ModelAdmin):
    list_display = ('request_number', 'player', 'target_club_country', 'status', 'payment_status', 'created_at')
    list_filter = ('status', 'payment_status')
    search_fields = ('request_number', 'athlete_full_name')


class ReadOnlyAdmin(admin.ModelAdmin):
    """Append-only records: no edits or deletes from the admin."""

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(FederationPayment)
class FederationPaymentAdmin(ReadOnlyAdmin):
    list_display = ('id', 'fee_type', 'amount', 'currency', 'status', 'transaction_reference', 'created_at')
    list_filter = ('fee_type',)


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = ('timestamp', 'category', 'action', 'actor', 'severity', 'entity_type', 'entity_id')
    list_filter = ('category', 'severity')
    search_fields = ('action', 'description')
