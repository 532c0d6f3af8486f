"""
URL configuration for the sports_reels project.
"""

from django.contrib import admin
from django.urls import path
from sports_reels.account.api import auth, users
from sports_reels.api import (
    administration,
    compliance,
    dashboard,
    embassy,
    federation,
    health,
    players,
    scouting,
    tokens,
    videos,
)

urlpatterns = [
    # Admin
    path("admin/", admin.site.urls),
    # Health check
    path("api/health/", health.health_check, name="health"),
    # Authentication
    path("api/auth/signup/", auth.signup, name="signup"),
    path("api/auth/login/", auth.login, name="login"),
    path("api/auth/refresh/", auth.refresh, name="refresh"),
    path("api/auth/logout/", auth.logout, name="logout"),
    path("api/logout/", auth.logout, name="logout_alias"),
    path("api/auth/change-password/", auth.change_password, name="change_password"),
    # Users
    path("api/users/me/", users.get_current_user_endpoint, name="current_user"),
    path("api/users/me/update/", users.update_current_user, name="update_user"),
    # Players
    path("api/players/", players.players, name="players"),
    path("api/players/<uuid:player_id>/", players.player_detail, name="player_detail"),
    path("api/players/<uuid:player_id>/metrics/", players.player_metrics, name="player_metrics"),
    path(
        "api/players/<uuid:player_id>/international-records/",
        players.international_records,
        name="player_international_records",
    ),
    path("api/players/<uuid:player_id>/eligibility/", players.player_eligibility, name="player_eligibility"),
    path(
        "api/players/<uuid:player_id>/eligibility/recalculate/",
        players.recalculate_eligibility,
        name="player_eligibility_recalculate",
    ),
    path("api/players/<uuid:player_id>/publish/", players.publish_player, name="player_publish"),
    path("api/players/<uuid:player_id>/videos/", players.player_videos, name="player_videos"),
    path("api/players/<uuid:player_id>/documents/", players.player_documents, name="player_documents"),
    path("api/scout/players/", players.scout_players, name="scout_players"),
    path("api/scout/players/<uuid:player_id>/", players.scout_player_detail, name="scout_player_detail"),
    # Videos and uploads
    path("api/uploads/request-url/", videos.request_upload_url, name="request_upload_url"),
    path("api/videos/", videos.videos, name="videos"),
    path("api/videos/<uuid:video_id>/", videos.video_detail, name="video_detail"),
    path("api/videos/<uuid:video_id>/analyze/", videos.analyze_video, name="video_analyze"),
    # Compliance
    path("api/compliance/orders/", compliance.orders, name="compliance_orders"),
    path("api/compliance/orders/<uuid:order_id>/", compliance.order_detail, name="compliance_order_detail"),
    path("api/compliance/orders/<uuid:order_id>/pay/", compliance.pay_order, name="compliance_order_pay"),
    path(
        "api/compliance/orders/<uuid:order_id>/generate/",
        compliance.generate_order_document,
        name="compliance_order_generate",
    ),
    path("api/compliance/documents/", compliance.documents, name="compliance_documents"),
    path(
        "api/compliance/documents/<uuid:document_id>/",
        compliance.document_detail,
        name="compliance_document_detail",
    ),
    path(
        "api/compliance/documents/<uuid:document_id>/submit/",
        compliance.submit_document,
        name="compliance_document_submit",
    ),
    path("api/verify/<str:code>/", compliance.verify_code, name="verify_code"),
    # Embassy
    path("api/embassy/verifications/", embassy.verifications, name="embassy_verifications"),
    path(
        "api/embassy/verifications/<uuid:verification_id>/",
        embassy.verification_detail,
        name="embassy_verification_detail",
    ),
    # Scouting
    path("api/scouting/inquiries/", scouting.inquiries, name="scouting_inquiries"),
    path("api/scouting/inquiries/<uuid:inquiry_id>/", scouting.inquiry_detail, name="scouting_inquiry_detail"),
    path(
        "api/scouting/inquiries/<uuid:inquiry_id>/messages/",
        scouting.inquiry_messages,
        name="scouting_inquiry_messages",
    ),
    # Tokens
    path("api/tokens/balance/", tokens.balance, name="token_balance"),
    path("api/tokens/transactions/", tokens.transactions, name="token_transactions"),
    path("api/tokens/costs/", tokens.costs, name="token_costs"),
    path("api/tokens/packs/", tokens.packs, name="token_packs"),
    path("api/tokens/spend/", tokens.spend, name="token_spend"),
    path("api/tokens/purchase/", tokens.purchase, name="token_purchase"),
    path(
        "api/tokens/purchase/<uuid:purchase_id>/confirm/",
        tokens.confirm_purchase,
        name="token_purchase_confirm",
    ),
    path("api/tokens/purchases/", tokens.purchases, name="token_purchases"),
    # Federation letters
    path("api/federation-letters/", federation.letter_requests, name="federation_letters"),
    path("api/federation-letters/summary/", federation.letter_request_summary, name="federation_letters_summary"),
    path(
        "api/federation-letters/<uuid:request_id>/",
        federation.letter_request_detail,
        name="federation_letter_detail",
    ),
    path(
        "api/federation-letters/<uuid:request_id>/confirm-payment/",
        federation.confirm_payment,
        name="federation_letter_confirm_payment",
    ),
    path(
        "api/federation-letters/<uuid:request_id>/submit/",
        federation.submit_request,
        name="federation_letter_submit",
    ),
    path(
        "api/federation-letters/<uuid:request_id>/process/",
        federation.process_request,
        name="federation_letter_process",
    ),
    path(
        "api/federation-letters/<uuid:request_id>/issue/",
        federation.issue_request,
        name="federation_letter_issue",
    ),
    path(
        "api/federation-letters/<uuid:request_id>/reject/",
        federation.reject_request,
        name="federation_letter_reject",
    ),
    path(
        "api/federation-letters/<uuid:request_id>/activities/",
        federation.request_activities,
        name="federation_letter_activities",
    ),
    # Federation admin
    path("api/federation-admin/dashboard-stats/", federation.dashboard_stats, name="federation_dashboard_stats"),
    path("api/federation-admin/requests/", federation.admin_requests, name="federation_admin_requests"),
    path("api/federation-admin/fee-schedules/", federation.fee_schedules, name="federation_fee_schedules"),
    path(
        "api/federation-admin/fee-schedules/<int:schedule_id>/",
        federation.fee_schedule_detail,
        name="federation_fee_schedule_detail",
    ),
    path("api/federation-admin/profiles/", federation.profiles, name="federation_profiles"),
    path(
        "api/federation-admin/profiles/<int:profile_id>/",
        federation.profile_detail,
        name="federation_profile_detail",
    ),
    # Dashboard
    path("api/dashboard/stats/", dashboard.stats, name="dashboard_stats"),
    path("api/dashboard/map-data/", dashboard.map_data, name="dashboard_map_data"),
    # Platform admin
    path("api/admin/stats/", administration.stats, name="admin_stats"),
    path("api/admin/users/", administration.users, name="admin_users"),
    path("api/admin/users/<int:user_id>/", administration.user_detail, name="admin_user_detail"),
    path(
        "api/admin/users/<int:user_id>/reset-password/",
        administration.reset_password,
        name="admin_user_reset_password",
    ),
    path("api/admin/audit-logs/", administration.audit_logs, name="admin_audit_logs"),
    path("api/admin/payments/", administration.payments, name="admin_payments"),
    path("api/admin/fee-schedules/", administration.fee_schedules, name="admin_fee_schedules"),
    path("api/admin/federations/", administration.federations, name="admin_federations"),
]
