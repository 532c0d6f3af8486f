"""
Async API client used by the portal.

Reads go through the shared QueryCache; mutations invalidate the entries
they change. Failed mutations raise PortalError with the title and text
the portal shows as a notification.
"""
import asyncio
from typing import Any, Callable, Dict, List, Optional
import aiohttp
from pydantic import ValidationError
from sports_reels.core.config import PORTAL_API_URL
from sports_reels.core.logging import get_logger
from sports_reels.portal.cache import QueryCache
from sports_reels.portal.schemas import (
    DashboardStats,
    MapData,
    SpendResult,
    TokenBalance,
    UploadTicket,
    VerificationRow,
)
from sports_reels.portal.tokens import TokenGuard

logger = get_logger(__name__)

BALANCE_PATH = '/api/tokens/balance/'
TRANSACTIONS_PATH = '/api/tokens/transactions/'
DEFAULT_CONTENT_TYPE = 'video/mp4'


class PortalError(Exception):
    """A request failed; title and description are shown to the user."""

    def __init__(self, title: str, description: str = '', status: Optional[int] = None,
                 payload: Optional[Dict[str, Any]] = None):
        self.title = title
        self.description = description
        self.status = status
        self.payload = payload or {}
        super().__init__(f"{title}: {description}" if description else title)


class UploadError(PortalError):
    """Either phase of a video upload failed; nothing was created."""

    def __init__(self, description: str, status: Optional[int] = None):
        super().__init__('Upload failed', description, status=status)


class InsufficientTokensError(PortalError):
    def __init__(self, description: str, status: Optional[int] = None,
                 payload: Optional[Dict[str, Any]] = None):
        super().__init__('Insufficient Tokens', description, status=status, payload=payload)


class PortalClient:
    """
    JSON-over-HTTP client for the platform API.

    Usage:
        async with PortalClient(role='scout') as client:
            await client.login(email, password)
            balance = await client.token_balance()
    """

    def __init__(self, base_url: str = PORTAL_API_URL, role: Optional[str] = None,
                 cache: Optional[QueryCache] = None, timeout: float = 30):
        self.base_url = base_url.rstrip('/')
        self.role = role
        self.cache = cache if cache is not None else QueryCache()
        self.timeout = timeout
        self.access_token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self

    async def __aexit__(self, *args):
        if self.session:
            await self.session.close()
            self.session = None

    def _headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        if self.access_token:
            headers['Authorization'] = f"Bearer {self.access_token}"
        elif self.role:
            # Demo mode role selection
            headers['X-User-Role'] = self.role
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None):
        if self.session is None:
            raise RuntimeError("PortalClient must be used as an async context manager")
        async with self.session.request(method, self._url(path), json=json, headers=self._headers()) as resp:
            try:
                payload = await resp.json(content_type=None)
            except ValueError:
                payload = {}
            return resp.status, payload if isinstance(payload, dict) else {'data': payload}

    async def _mutate(self, method: str, path: str, json: Optional[Dict[str, Any]] = None,
                      title: str = 'Request failed') -> Dict[str, Any]:
        status, payload = await self._request(method, path, json=json)
        if status >= 400:
            logger.warning(f"{method} {path} failed with {status}: {payload.get('error')}")
            raise PortalError(title, payload.get('error', f"HTTP {status}"), status=status, payload=payload)
        return payload

    # Reads

    async def get(self, path: str, use_cache: bool = True) -> Dict[str, Any]:
        """GET a path through the query cache; read errors raise PortalError."""
        async def load():
            status, payload = await self._request('GET', path)
            if status >= 400:
                raise PortalError('Request failed', payload.get('error', f"HTTP {status}"), status=status)
            return payload

        if not use_cache:
            return await load()
        return await self.cache.fetch(path, load)

    async def token_balance(self) -> TokenBalance:
        return TokenBalance.model_validate(await self.get(BALANCE_PATH))

    async def token_guard(self) -> TokenGuard:
        balance = await self.token_balance()
        return TokenGuard(self.role, balance.balance)

    async def map_data(self) -> MapData:
        return MapData.model_validate(await self.get('/api/dashboard/map-data/'))

    async def dashboard_stats(self) -> DashboardStats:
        return DashboardStats.model_validate(await self.get('/api/dashboard/stats/'))

    async def verifications(self, status: Optional[str] = None) -> List[VerificationRow]:
        """Rows of the embassy verification table."""
        path = '/api/embassy/verifications/'
        if status:
            path = f"{path}?status={status}"
        payload = await self.get(path)
        return [VerificationRow.model_validate(row) for row in payload.get('verifications', [])]

    # Mutations

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        return await self._mutate('POST', path, json=json, **kwargs)

    async def put(self, path: str, json: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        return await self._mutate('PUT', path, json=json, **kwargs)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and keep the JWT pair; the user's role replaces any demo role."""
        status, payload = await self._request('POST', '/api/auth/login/', json={
            'email': email,
            'password': password,
        })
        if status == 401:
            raise PortalError('Invalid credentials', 'Check your email and password and try again.', status=status)
        if status >= 400:
            raise PortalError('Login failed', payload.get('error', f"HTTP {status}"), status=status)

        self.access_token = payload['access']
        self.refresh_token = payload['refresh']
        self.role = payload['user']['role']
        self.cache.clear()
        logger.info(f"Logged in as {email} ({self.role})")
        return payload['user']

    async def logout(self):
        await self._request('POST', '/api/logout/')
        self.access_token = None
        self.refresh_token = None
        self.cache.clear()

    async def spend(self, action: str, player_id: Optional[str] = None,
                    video_id: Optional[str] = None) -> SpendResult:
        """
        Spend tokens on a gated action.

        The cached balance decides whether to try at all; the server makes
        the final call. Balance and ledger caches are dropped after any
        attempt that reached the server.
        """
        guard = await self.token_guard()
        cost = guard.get_cost(action)
        if not cost:
            raise PortalError('Action unavailable', f'Action "{action}" is not available for your role.')
        if not guard.can_afford(action):
            raise InsufficientTokensError(
                f"This action costs {cost} tokens and your balance is {guard.balance}."
            )

        body = {'action': action}
        if player_id:
            body['player_id'] = str(player_id)
        if video_id:
            body['video_id'] = str(video_id)

        try:
            status, payload = await self._request('POST', '/api/tokens/spend/', json=body)
        finally:
            self.cache.invalidate(BALANCE_PATH)
            self.cache.invalidate(TRANSACTIONS_PATH)

        if status >= 400:
            message = payload.get('error', f"HTTP {status}")
            if payload.get('needs_purchase'):
                raise InsufficientTokensError(message, status=status, payload=payload)
            raise PortalError('Request failed', message, status=status, payload=payload)
        return SpendResult.model_validate(payload)

    async def upload_video(self, content: bytes, name: str, content_type: Optional[str] = None,
                           metadata: Optional[Dict[str, Any]] = None,
                           on_progress: Optional[Callable[[int], None]] = None) -> Dict[str, Any]:
        """
        Upload a video file and register it.

        1. ask the API for a presigned upload URL
        2. PUT the bytes straight to object storage
        3. create the video with file_url set to the returned object path

        A failure in any step raises UploadError and no video is created.
        """
        content_type = content_type or DEFAULT_CONTENT_TYPE

        def progress(value: int):
            if on_progress:
                on_progress(value)

        progress(10)
        status, payload = await self._upload_step('POST', '/api/uploads/request-url/', {
            'name': name,
            'size': len(content),
            'content_type': content_type,
        }, 'Failed to get upload URL')
        if status >= 400:
            raise UploadError(payload.get('error', 'Failed to get upload URL'), status=status)
        try:
            ticket = UploadTicket.model_validate(payload)
        except ValidationError as e:
            raise UploadError(f"Invalid upload URL response: {e.error_count()} field error(s)") from e
        progress(30)

        try:
            async with self.session.put(ticket.upload_url, data=content,
                                        headers={'Content-Type': content_type}) as resp:
                if resp.status >= 400:
                    raise UploadError('Failed to upload file', status=resp.status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UploadError(f"Failed to upload file: {e}") from e
        progress(100)

        body = dict(metadata or {})
        body['file_url'] = ticket.object_path
        body.setdefault('source', 'manual')
        status, payload = await self._upload_step('POST', '/api/videos/', body, 'Failed to create video')
        if status >= 400:
            raise UploadError(payload.get('error', 'Failed to create video'), status=status)

        self.cache.invalidate('/api/videos/')
        self.cache.invalidate('/api/players/')
        logger.info(f"Uploaded video {payload.get('id')} to {ticket.object_path}")
        return payload

    async def _upload_step(self, method: str, path: str, json: Dict[str, Any], failure: str):
        try:
            return await self._request(method, path, json=json)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"{method} {path} failed during upload: {e}")
            raise UploadError(f"{failure}: {e}") from e
