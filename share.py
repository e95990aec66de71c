"""Shareable links, share messages and the two share actions.

Clipboard and native share run in the visitor's browser. A click opens a
request carrying the script to run. The script's result comes back on a
later rerun through ``streamlit_js_eval``, and only then is the request
settled as copied, shared, unavailable or failed.
"""

import base64
import enum
import json
import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from streamlit_js_eval import streamlit_js_eval

from age_card import render_age_card
from impact_dates import age_at_impact, format_shared_date
from widget_state import BrowserRequest, WidgetState

logger = logging.getLogger(__name__)

SHARE_TITLE = "Mi edad durante el impacto del asteroide"
IMAGE_NAME = "age.png"

CLIPBOARD = "clipboard"
NATIVE_SHARE = "share"


class ShareOutcome(enum.Enum):
    COPIED = "copied"
    SHARED = "shared"
    SHARED_WITHOUT_IMAGE = "shared_without_image"
    UNAVAILABLE = "unavailable"
    PENDING = "pending"
    SKIPPED = "skipped"
    FAILED = "failed"


# Values the browser scripts below resolve to; anything else is an error text.
_BROWSER_RESULTS = {
    CLIPBOARD: {"copied": ShareOutcome.COPIED, "unavailable": ShareOutcome.UNAVAILABLE},
    NATIVE_SHARE: {
        "shared": ShareOutcome.SHARED,
        "shared_without_image": ShareOutcome.SHARED_WITHOUT_IMAGE,
        "unavailable": ShareOutcome.UNAVAILABLE,
    },
}


@dataclass(frozen=True)
class SharePayload:
    title: str
    text: str
    url: str
    image: Optional[bytes] = None

    def to_json(self) -> str:
        data = {"title": self.title, "text": self.text, "url": self.url}
        if self.image is not None:
            data["image"] = "data:image/png;base64," + base64.b64encode(self.image).decode()
            data["imageName"] = IMAGE_NAME
        return json.dumps(data)


# ------------------------- Links & messages -----------------------
def build_share_link(birth: Optional[date], base_url: str = "") -> str:
    if birth is None:
        return ""
    return f"{base_url.rstrip('/')}/?date={format_shared_date(birth)}"


def clipboard_message(birth: Optional[date], base_url: str = "") -> str:
    if birth is None:
        return ""
    link = build_share_link(birth, base_url)
    return f"Tendré {age_at_impact(birth)} años al momento del impacto: {link}"


def native_share_payload(birth: Optional[date], base_url: str = "", image: Optional[bytes] = None) -> Optional[SharePayload]:
    if birth is None:
        return None
    return SharePayload(
        title=SHARE_TITLE,
        text=f"Tendré {age_at_impact(birth)} años cuando el asteroide 2024 YR4 se acerque a la Tierra",
        url=build_share_link(birth, base_url),
        image=image,
    )


# ------------------------- Browser scripts ------------------------
_CLIPBOARD_JS = """(async () => {
  const nav = window.parent.navigator;
  if (!nav.clipboard || !nav.clipboard.writeText) return "unavailable";
  try {
    await nav.clipboard.writeText(%s);
    return "copied";
  } catch (err) {
    return "error: " + err;
  }
})()"""

_SHARE_JS = """(async () => {
  const nav = window.parent.navigator;
  if (!nav.share) return "unavailable";
  const data = %s;
  const shareData = {title: data.title, text: data.text, url: data.url};
  try {
    if (data.image) {
      const blob = await (await fetch(data.image)).blob();
      const file = new File([blob], data.imageName, {type: "image/png"});
      if (!nav.canShare || nav.canShare({files: [file]})) shareData.files = [file];
    }
  } catch (err) {
    console.warn("Could not attach image to share", err);
  }
  try {
    await nav.share(shareData);
    return shareData.files ? "shared" : "shared_without_image";
  } catch (err) {
    return "error: " + err;
  }
})()"""


def clipboard_script(text: str) -> str:
    return _CLIPBOARD_JS % json.dumps(text)


def share_script(payload: SharePayload) -> str:
    return _SHARE_JS % payload.to_json()


def _new_request(kind: str, expression: str) -> BrowserRequest:
    return BrowserRequest(kind=kind, key=f"{kind}-{uuid.uuid4().hex}", expression=expression)


def _js_eval(expression: str, key: str):
    return streamlit_js_eval(js_expressions=expression, key=key, want_output=True)


# ----------------------------- Actions ----------------------------
def request_copy(state: WidgetState, base_url: str) -> ShareOutcome:
    """Queue the share message for the visitor's clipboard."""
    text = clipboard_message(state.birth_date, base_url)
    if not text:
        return ShareOutcome.SKIPPED
    state.open_request(_new_request(CLIPBOARD, clipboard_script(text)))
    return ShareOutcome.PENDING


def request_card_share(state: WidgetState, base_url: str, native_share: bool = True,
                       render: Callable[[date], bytes] = render_age_card) -> ShareOutcome:
    """Capture the age card and queue it for the native share sheet.

    No clipboard fallback: without a share sheet nothing happens.
    """
    if state.birth_date is None or not state.show_card:
        return ShareOutcome.SKIPPED
    if not native_share:
        logger.info("Native share disabled, skipping")
        return ShareOutcome.UNAVAILABLE

    try:
        image = render(state.birth_date)
    except Exception as err:
        logger.warning("Could not attach image to share: %s", err)
        image = None

    payload = native_share_payload(state.birth_date, base_url, image)
    state.open_request(_new_request(NATIVE_SHARE, share_script(payload)))
    return ShareOutcome.PENDING


def settle_browser_request(state: WidgetState, evaluate: Optional[Callable[[str, str], object]] = None,
                           now: Optional[datetime] = None, notice_seconds: int = 3) -> Optional[ShareOutcome]:
    """Run the pending request in the browser and apply its result.

    Returns None when nothing is pending and PENDING while the browser has
    not answered yet. The "copied" notice goes up only when the browser
    reports a successful clipboard write.
    """
    request = state.pending_request
    if request is None:
        return None
    evaluate = evaluate or _js_eval
    try:
        result = evaluate(request.expression, request.key)
    except Exception:
        logger.exception("Browser request %s failed", request.key)
        state.close_request()
        return ShareOutcome.FAILED
    if result is None:
        return ShareOutcome.PENDING

    state.close_request()
    outcome = _BROWSER_RESULTS[request.kind].get(str(result), ShareOutcome.FAILED)
    if request.kind == CLIPBOARD:
        if outcome is ShareOutcome.COPIED:
            state.notify_copied(now, seconds=notice_seconds)
        elif outcome is ShareOutcome.UNAVAILABLE:
            logger.warning("Clipboard not available in this browser")
        else:
            logger.error("Error al copiar: %s", result)
    elif outcome is ShareOutcome.UNAVAILABLE:
        logger.info("Native share not available, skipping")
    elif outcome is ShareOutcome.FAILED:
        logger.error("Error sharing: %s", result)
    return outcome
