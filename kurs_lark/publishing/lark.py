"""Minimal Lark (Larksuite) Sheets client used to append rate rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests

from kurs_lark.config import LARK_BASE_URL, LarkSettings
from kurs_lark.exceptions import AuthError, PublishError, SheetLookupError, WriteError
from kurs_lark.publishing.batch import SHEET_RANGE, UploadRows
from kurs_lark.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class PublishResult:
    sheet_id: str
    rows: int
    updated_range: str | None = None


class LarkSheetsClient:
    """Talks to the three Lark Open API endpoints the publisher needs.

    Every call is a single attempt. Lark reports business failures with a
    non-zero ``code`` in an otherwise successful HTTP response, so both the
    transport status and the body are checked.
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        spreadsheet_token: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        base_url: str = LARK_BASE_URL,
        sheet_range: str = SHEET_RANGE,
    ) -> None:
        self.app_id = app_id
        self._app_secret = app_secret
        self.spreadsheet_token = spreadsheet_token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.sheet_range = sheet_range

    @classmethod
    def from_settings(
        cls, settings: LarkSettings, *, session: Optional[requests.Session] = None
    ) -> "LarkSheetsClient":
        return cls(
            settings.app_id,
            settings.app_secret,
            settings.spreadsheet_token,
            session=session,
            base_url=settings.base_url,
        )

    def get_access_token(self) -> str:
        payload = self._call(
            "POST",
            "/auth/v3/tenant_access_token/internal",
            AuthError,
            "get access token",
            json={"app_id": self.app_id, "app_secret": self._app_secret},
        )
        token = payload.get("tenant_access_token")
        if not token:
            raise AuthError("Lark response did not include a tenant_access_token")
        LOGGER.info("Got Lark access token")
        return token

    def find_sheet_id(self, access_token: str) -> str:
        payload = self._call(
            "GET",
            f"/sheets/v3/spreadsheets/{self.spreadsheet_token}/sheets/query",
            SheetLookupError,
            "find sheet ID",
            headers=self._auth_headers(access_token),
        )
        sheets = (payload.get("data") or {}).get("sheets") or []
        if not sheets:
            raise SheetLookupError(f"No sheets found in spreadsheet {self.spreadsheet_token}")
        first = sheets[0]
        sheet_id = first.get("sheet_id")
        if not sheet_id:
            raise SheetLookupError(f"First sheet of {self.spreadsheet_token} has no sheet_id")
        LOGGER.info("Using sheet %s (ID: %s)", first.get("title"), sheet_id)
        return sheet_id

    def append_values(self, access_token: str, sheet_id: str, rows: UploadRows) -> dict[str, Any]:
        if not rows:
            raise WriteError("Refusing to append an empty row matrix")
        payload = self._call(
            "POST",
            f"/sheets/v2/spreadsheets/{self.spreadsheet_token}/values_append",
            WriteError,
            "append values",
            headers=self._auth_headers(access_token),
            json={"valueRange": {"range": f"{sheet_id}!{self.sheet_range}", "values": rows}},
        )
        return payload.get("data") or {}

    def publish(self, rows: UploadRows) -> PublishResult:
        """Authenticate, resolve the first sheet and append ``rows`` to it."""

        if not rows:
            raise WriteError("Refusing to append an empty row matrix")
        token = self.get_access_token()
        sheet_id = self.find_sheet_id(token)
        data = self.append_values(token, sheet_id, rows)
        updates = data.get("updates") or {}
        result = PublishResult(
            sheet_id=sheet_id, rows=len(rows), updated_range=updates.get("updatedRange")
        )
        LOGGER.info("Appended %s rows to sheet %s", result.rows, sheet_id)
        return result

    def _call(
        self,
        method: str,
        path: str,
        error_cls: type[PublishError],
        action: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json; charset=utf-8", **kwargs.pop("headers", {})}
        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise error_cls(f"Failed to {action}: {exc}") from exc
        except ValueError as exc:
            raise error_cls(f"Failed to {action}: response was not JSON") from exc
        if not isinstance(payload, dict):
            raise error_cls(f"Failed to {action}: unexpected response {payload!r}")
        code = payload.get("code")
        if code != 0:
            raise error_cls(f"Failed to {action}: Lark API error {code}: {payload.get('msg')}")
        return payload

    @staticmethod
    def _auth_headers(access_token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}


__all__ = ["LarkSheetsClient", "PublishResult"]
