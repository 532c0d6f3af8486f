from .player import Player, PlayerMetrics, InternationalRecord
from .video import Video, VideoInsight
from .compliance import VisaType, EligibilityScore, ComplianceOrder, ComplianceDocument
from .embassy import EmbassyVerification
from .scouting import ScoutingInquiry, InquiryMessage
from .tokens import TokenBalance, TokenTransaction, TokenPack, TokenPurchase
from .federation import (
    FederationProfile,
    FederationFeeSchedule,
    FederationLetterRequest,
    FederationRequestActivity,
    FederationPayment,
)
from .audit import AuditLog

__all__ = [
    'Player',
    'PlayerMetrics',
    'InternationalRecord',
    'Video',
    'VideoInsight',
    'VisaType',
    'EligibilityScore',
    'ComplianceOrder',
    'ComplianceDocument',
    'EmbassyVerification',
    'ScoutingInquiry',
    'InquiryMessage',
    'TokenBalance',
    'TokenTransaction',
    'TokenPack',
    'TokenPurchase',
    'FederationProfile',
    'FederationFeeSchedule',
    'FederationLetterRequest',
    'FederationRequestActivity',
    'FederationPayment',
    'AuditLog',
]
