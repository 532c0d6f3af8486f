"""
Payload models for the API responses the portal reads.
"""
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field
from sports_reels.portal.widgets import verification_actions, verification_status_label


class PlayerRef(BaseModel):
    id: str
    name: str


class PlayerOrigin(BaseModel):
    country: str
    count: int = Field(0, ge=0)
    players: List[PlayerRef] = Field(default_factory=list)


class TransferDestination(BaseModel):
    from_country: str
    to_country: str
    player_name: str
    player_id: str


class MapData(BaseModel):
    player_origins: List[PlayerOrigin] = Field(default_factory=list)
    transfer_destinations: List[TransferDestination] = Field(default_factory=list)


class DashboardStats(BaseModel):
    total_players: int = 0
    green_status: int = 0
    yellow_status: int = 0
    red_status: int = 0
    pending_verifications: int = 0
    active_inquiries: int = 0
    reports_generated: int = 0


class UploadTicket(BaseModel):
    """Answer of the upload-URL request: where to PUT the bytes."""

    upload_url: str
    object_path: str
    file_name: str = ''
    expires_in: Optional[int] = None


class TokenBalance(BaseModel):
    balance: int
    lifetime_purchased: int = 0
    lifetime_spent: int = 0
    updated_at: Optional[str] = None


class SpendResult(BaseModel):
    success: bool
    new_balance: int
    cost: int
    action: str


class VerificationRow(BaseModel):
    id: str
    player_name: str = ''
    embassy_country: str = ''
    status: str
    verification_code: str = ''
    submitted_at: Optional[str] = None

    @property
    def status_label(self) -> str:
        return verification_status_label(self.status)

    @property
    def actions(self) -> Tuple[str, ...]:
        return verification_actions(self.status)
