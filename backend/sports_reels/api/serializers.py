"""
Model to JSON conversion for the API views.
"""
from typing import Any, Dict, Optional


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def _str(value) -> Optional[str]:
    return str(value) if value is not None else None


def player_summary(player) -> Dict[str, Any]:
    return {
        'id': str(player.id),
        'first_name': player.first_name,
        'last_name': player.last_name,
        'full_name': player.full_name,
        'position': player.position,
        'nationality': player.nationality,
        'current_club_name': player.current_club_name,
        'league_band': player.league_band,
        'overall_score': player.overall_score,
        'published_to_scouts': player.published_to_scouts,
    }


def player_detail(player) -> Dict[str, Any]:
    data = player_summary(player)
    data.update({
        'team_id': player.team_id,
        'date_of_birth': _iso(player.date_of_birth),
        'second_nationality': player.second_nationality,
        'current_league': player.current_league,
        'market_value': player.market_value,
        'contract_end_date': _iso(player.contract_end_date),
        'agent_name': player.agent_name,
        'national_team_caps': player.national_team_caps,
        'international_caps': player.international_caps,
        'continental_games': player.continental_games,
        'club_minutes_current_season': player.club_minutes_current_season,
        'club_minutes_last_12_months': player.club_minutes_last_12_months,
        'international_minutes': player.international_minutes,
        'total_career_minutes': player.total_career_minutes,
        'goals': player.goals,
        'assists': player.assists,
        'medical_data_available': player.medical_data_available,
        'gps_data_available': player.gps_data_available,
        'created_at': _iso(player.created_at),
        'updated_at': _iso(player.updated_at),
    })
    for name in player.SCORE_FIELDS:
        data[name] = getattr(player, name)
    return data


def metrics(entry) -> Dict[str, Any]:
    return {
        'id': entry.id,
        'player_id': str(entry.player_id),
        'season': entry.season,
        'current_season_minutes': entry.current_season_minutes,
        'games_played': entry.games_played,
        'goals': entry.goals,
        'assists': entry.assists,
    }


def international_record(record) -> Dict[str, Any]:
    return {
        'id': record.id,
        'player_id': str(record.player_id),
        'national_team': record.national_team,
        'team_level': record.team_level,
        'caps': record.caps,
        'goals': record.goals,
        'debut_date': _iso(record.debut_date),
    }


def eligibility_score(score) -> Dict[str, Any]:
    return {
        'visa_type': score.visa_type,
        'score': score.score,
        'status': score.status,
        'breakdown': score.breakdown,
        'recommendations': score.recommendations,
        'league_band_applied': score.league_band_applied,
        'calculated_at': _iso(score.calculated_at),
    }


def video(item) -> Dict[str, Any]:
    return {
        'id': str(item.id),
        'player_id': str(item.player_id),
        'team_id': item.team_id,
        'title': item.title,
        'source': item.source,
        'file_url': item.file_url,
        'thumbnail_url': item.thumbnail_url,
        'duration': item.duration,
        'match_date': _iso(item.match_date),
        'competition': item.competition,
        'opponent': item.opponent,
        'minutes_played': item.minutes_played,
        'processed': item.processed,
        'upload_date': _iso(item.upload_date),
    }


def video_insight(insight) -> Dict[str, Any]:
    return {
        'id': insight.id,
        'video_id': str(insight.video_id),
        'player_id': str(insight.player_id),
        'minutes_played': insight.minutes_played,
        'distance_covered_km': insight.distance_covered_km,
        'sprint_count': insight.sprint_count,
        'passes_attempted': insight.passes_attempted,
        'passes_completed': insight.passes_completed,
        'shots_on_target': insight.shots_on_target,
        'tackles': insight.tackles,
        'interceptions': insight.interceptions,
        'duels_won': insight.duels_won,
        'rating': insight.rating,
        'strengths': insight.strengths,
        'improvements': insight.improvements,
        'ai_analysis': insight.ai_analysis,
        'created_at': _iso(insight.created_at),
    }


def compliance_order(order) -> Dict[str, Any]:
    return {
        'id': str(order.id),
        'player_id': str(order.player_id),
        'visa_type': order.visa_type,
        'target_country': order.target_country,
        'status': order.status,
        'amount': str(order.amount),
        'currency': order.currency,
        'payment_reference': order.payment_reference,
        'paid_at': _iso(order.paid_at),
        'created_at': _iso(order.created_at),
    }


def compliance_document(document, include_snapshot: bool = False) -> Dict[str, Any]:
    data = {
        'id': str(document.id),
        'player_id': str(document.player_id),
        'order_id': _str(document.order_id),
        'document_type': document.document_type,
        'visa_type': document.visa_type,
        'target_country': document.target_country,
        'date_range_start': _iso(document.date_range_start),
        'date_range_end': _iso(document.date_range_end),
        'eligibility_score': document.eligibility_score,
        'ai_summary': document.ai_summary,
        'status': document.status,
        'generated_at': _iso(document.generated_at),
        'submitted_at': _iso(document.submitted_at),
    }
    if include_snapshot:
        data['eligibility_snapshot'] = document.eligibility_snapshot
    return data


def verification(item) -> Dict[str, Any]:
    return {
        'id': str(item.id),
        'document_id': str(item.document_id),
        'player_id': str(item.player_id),
        'player_name': item.player.full_name,
        'embassy_country': item.embassy_country,
        'status': item.status,
        'verification_code': item.verification_code,
        'reviewed_by': item.reviewed_by_id,
        'notes': item.notes,
        'submitted_at': _iso(item.submitted_at),
        'verified_at': _iso(item.verified_at),
    }


def public_verification(item) -> Dict[str, Any]:
    """What anyone holding the code may see."""
    document = item.document
    return {
        'verification_code': item.verification_code,
        'status': item.status,
        'embassy_country': item.embassy_country,
        'player_name': item.player.full_name,
        'player_nationality': item.player.nationality,
        'document_type': document.document_type,
        'visa_type': document.visa_type,
        'document_status': document.status,
        'submitted_at': _iso(item.submitted_at),
        'verified_at': _iso(item.verified_at),
    }


def inquiry(item) -> Dict[str, Any]:
    return {
        'id': str(item.id),
        'player_id': str(item.player_id),
        'player_name': item.player.full_name,
        'buying_club_name': item.buying_club_name,
        'selling_club_name': item.selling_club_name,
        'status': item.status,
        'compliance_score': item.compliance_score,
        'message': item.message,
        'created_by': item.created_by_id,
        'created_at': _iso(item.created_at),
        'updated_at': _iso(item.updated_at),
    }


def inquiry_message(message) -> Dict[str, Any]:
    return {
        'id': message.id,
        'inquiry_id': str(message.inquiry_id),
        'sender_id': message.sender_id,
        'content': message.content,
        'created_at': _iso(message.created_at),
    }


def token_balance(balance) -> Dict[str, Any]:
    return {
        'balance': balance.balance,
        'lifetime_purchased': balance.lifetime_purchased,
        'lifetime_spent': balance.lifetime_spent,
        'updated_at': _iso(balance.updated_at),
    }


def token_transaction(entry) -> Dict[str, Any]:
    return {
        'id': entry.id,
        'type': entry.type,
        'amount': entry.amount,
        'action': entry.action,
        'description': entry.description,
        'player_id': _str(entry.player_id),
        'video_id': _str(entry.video_id),
        'purchase_id': _str(entry.purchase_id),
        'balance_after': entry.balance_after,
        'expires_at': _iso(entry.expires_at),
        'created_at': _iso(entry.created_at),
    }


def token_pack(pack) -> Dict[str, Any]:
    return {
        'id': pack.id,
        'name': pack.name,
        'tokens': pack.tokens,
        'price_cents': pack.price_cents,
        'currency': pack.currency,
        'description': pack.description,
    }


def token_purchase(purchase) -> Dict[str, Any]:
    return {
        'id': str(purchase.id),
        'pack_id': purchase.pack_id,
        'pack_name': purchase.pack.name,
        'tokens': purchase.tokens,
        'amount_paid_cents': purchase.amount_paid_cents,
        'currency': purchase.currency,
        'payment_method': purchase.payment_method,
        'payment_reference': purchase.payment_reference,
        'status': purchase.status,
        'created_at': _iso(purchase.created_at),
        'completed_at': _iso(purchase.completed_at),
    }


def federation_request(item) -> Dict[str, Any]:
    return {
        'id': str(item.id),
        'request_number': item.request_number,
        'team_id': item.team_id,
        'player_id': str(item.player_id),
        'federation_id': item.federation_id,
        'status': item.status,
        'athlete_full_name': item.athlete_full_name,
        'athlete_nationality': item.athlete_nationality,
        'target_club_name': item.target_club_name,
        'target_club_country': item.target_club_country,
        'transfer_type': item.transfer_type,
        'invitation_letter_path': item.invitation_letter_path,
        'notes': item.notes,
        'fee_amount': str(item.fee_amount),
        'service_charge': str(item.service_charge),
        'total_amount': str(item.total_amount),
        'currency': item.currency,
        'payment_status': item.payment_status,
        'payment_reference': item.payment_reference,
        'payment_confirmed_at': _iso(item.payment_confirmed_at),
        'submitted_by': item.submitted_by_id,
        'submitted_at': _iso(item.submitted_at),
        'processed_by': item.processed_by_id,
        'processed_at': _iso(item.processed_at),
        'issued_document_path': item.issued_document_path,
        'issued_at': _iso(item.issued_at),
        'rejection_reason': item.rejection_reason,
        'created_at': _iso(item.created_at),
        'updated_at': _iso(item.updated_at),
    }


def federation_activity(activity) -> Dict[str, Any]:
    return {
        'id': activity.id,
        'request_id': str(activity.request_id),
        'actor_id': activity.actor_id,
        'activity_type': activity.activity_type,
        'description': activity.description,
        'previous_status': activity.previous_status,
        'new_status': activity.new_status,
        'timestamp': _iso(activity.timestamp),
    }


def fee_schedule(schedule) -> Dict[str, Any]:
    return {
        'id': schedule.id,
        'federation_id': schedule.federation_id,
        'country': schedule.country,
        'base_fee': str(schedule.base_fee),
        'platform_service_charge': str(schedule.platform_service_charge),
        'total': str(schedule.total),
        'currency': schedule.currency,
        'effective_from': _iso(schedule.effective_from),
        'effective_to': _iso(schedule.effective_to),
        'is_active': schedule.is_active,
        'notes': schedule.notes,
    }


def federation_profile(profile) -> Dict[str, Any]:
    return {
        'id': profile.id,
        'name': profile.name,
        'country': profile.country,
        'region': profile.region,
        'contact_email': profile.contact_email,
        'default_fee': str(profile.default_fee),
        'platform_service_charge': str(profile.platform_service_charge),
        'currency': profile.currency,
        'is_active': profile.is_active,
    }


def federation_payment(payment) -> Dict[str, Any]:
    return {
        'id': payment.id,
        'federation_id': payment.federation_id,
        'request_id': _str(payment.request_id),
        'team_id': payment.team_id,
        'fee_type': payment.fee_type,
        'amount': str(payment.amount),
        'currency': payment.currency,
        'status': payment.status,
        'transaction_reference': payment.transaction_reference,
        'created_at': _iso(payment.created_at),
    }


def audit_log(entry) -> Dict[str, Any]:
    return {
        'id': entry.id,
        'category': entry.category,
        'action': entry.action,
        'entity_type': entry.entity_type,
        'entity_id': entry.entity_id,
        'actor_id': entry.actor_id,
        'actor_role': entry.actor_role,
        'description': entry.description,
        'details': entry.details,
        'severity': entry.severity,
        'ip_address': entry.ip_address,
        'timestamp': _iso(entry.timestamp),
    }
