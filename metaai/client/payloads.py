"""Fixed request shapes expected by the Meta AI web backend.

Header sets, document ids and variable blocks mirror what the web client
sends; the backend rejects requests that deviate from them.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

LANDING_URL = "https://www.meta.ai/"
GRAPHQL_URL = "https://www.meta.ai/api/graphql/"
CHAT_URL = "https://graph.meta.ai/graphql?locale=user"

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
ACCEPT_LANGUAGE = "en-US,en;q=0.9"
ORIGIN = "https://www.meta.ai"
REFERER = "https://www.meta.ai/"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

ACCEPT_TOS_DOC_ID = "7604648749596940"
SEND_MESSAGE_DOC_ID = "7783822248314888"
SEARCH_PLUGIN_DOC_ID = "6946734308765963"

ACCEPT_TOS_FRIENDLY_NAME = "useAbraAcceptTOSForTempUserMutation"
SEND_MESSAGE_FRIENDLY_NAME = "useAbraSendMessageMutation"
SEARCH_PLUGIN_FRIENDLY_NAME = "AbraSearchPluginDialogQuery"

TEMP_USER_BIRTH_DATE = "1997-01-01"


@dataclass(frozen=True)
class RequestSpec:
    """Method, url, headers and optional form body of one outbound request."""

    method: str
    url: str
    headers: Dict[str, str]
    data: Dict[str, str] | None = None


def _compact_json(value: Dict[str, Any]) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _form_headers(cookies: str, friendly_name: str, user_agent: str, accept_language: str) -> Dict[str, str]:
    return {
        "cookie": cookies,
        "accept": "*/*",
        "referer": REFERER,
        "accept-language": accept_language,
        "content-type": FORM_CONTENT_TYPE,
        "user-agent": user_agent,
        "origin": ORIGIN,
        "priority": "u=1, i",
        "x-fb-friendly-name": friendly_name,
    }


def landing_request(
    url: str = LANDING_URL,
    *,
    user_agent: str = USER_AGENT,
    accept_language: str = ACCEPT_LANGUAGE,
) -> RequestSpec:
    headers = {
        "user-agent": user_agent,
        "accept-language": accept_language,
        "accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
        ),
        "sec-fetch-mode": "navigate",
    }
    return RequestSpec(method="GET", url=url, headers=headers)


def accept_tos_request(
    lsd: str,
    cookies: str,
    url: str = GRAPHQL_URL,
    *,
    user_agent: str = USER_AGENT,
    accept_language: str = ACCEPT_LANGUAGE,
) -> RequestSpec:
    variables = {
        "dob": TEMP_USER_BIRTH_DATE,
        "icebreaker_type": "TEXT",
        "__relay_internal__pv__WebPixelRatiorelayprovider": 1,
    }
    data = {
        "lsd": lsd,
        "variables": _compact_json(variables),
        "server_timestamps": "true",
        "doc_id": ACCEPT_TOS_DOC_ID,
    }
    headers = {
        "user-agent": user_agent,
        "x-fb-friendly-name": ACCEPT_TOS_FRIENDLY_NAME,
        "x-fb-lsd": lsd,
        "accept": "*/*",
        "origin": ORIGIN,
        "sec-fetch-site": "same-origin",
        "sec-fetch-mode": "cors",
        "sec-fetch-dest": "empty",
        "referer": REFERER,
        "accept-language": accept_language,
        "priority": "u=1, i",
        "content-type": FORM_CONTENT_TYPE,
        "cookie": cookies,
    }
    return RequestSpec(method="POST", url=url, headers=headers, data=data)


def send_message_request(
    message: str,
    *,
    access_token: str,
    lsd: str,
    cookies: str,
    conversation_id: str,
    threading_id: str,
    url: str = CHAT_URL,
    user_agent: str = USER_AGENT,
    accept_language: str = ACCEPT_LANGUAGE,
) -> RequestSpec:
    variables = {
        "message": {"sensitive_string_value": message},
        "externalConversationId": conversation_id,
        "offlineThreadingId": threading_id,
        "suggestedPromptIndex": None,
        "flashVideoRecapInput": {"images": []},
        "flashPreviewInput": None,
        "promptPrefix": None,
        "entrypoint": "ABRA__CHAT__TEXT",
        "icebreaker_type": "TEXT",
        "__relay_internal__pv__AbraDebugDevOnlyrelayprovider": False,
        "__relay_internal__pv__WebPixelRatiorelayprovider": 1,
    }
    data = {
        "access_token": access_token,
        "dpr": "1",
        "lsd": lsd,
        "jazoest": "2925",
        "fb_api_caller_class": SEND_MESSAGE_FRIENDLY_NAME,
        "server_timestamps": "true",
        "doc_id": SEND_MESSAGE_DOC_ID,
        "variables": _compact_json(variables),
    }
    headers = _form_headers(cookies, SEND_MESSAGE_FRIENDLY_NAME, user_agent, accept_language)
    return RequestSpec(method="POST", url=url, headers=headers, data=data)


def search_plugin_request(
    fetch_id: str,
    *,
    access_token: str,
    lsd: str,
    cookies: str,
    url: str = CHAT_URL,
    user_agent: str = USER_AGENT,
    accept_language: str = ACCEPT_LANGUAGE,
) -> RequestSpec:
    data = {
        "access_token": access_token,
        "av": "0",
        "lsd": lsd,
        "dpr": "1",
        "fbi_api_caller_class": "RelayModern",
        "fbi_api_req_friendly_name": SEARCH_PLUGIN_FRIENDLY_NAME,
        "server_timestamps": "true",
        "doc_id": SEARCH_PLUGIN_DOC_ID,
        "variables": _compact_json({"abraMessageFetchID": fetch_id}),
    }
    headers = _form_headers(cookies, SEARCH_PLUGIN_FRIENDLY_NAME, user_agent, accept_language)
    return RequestSpec(method="POST", url=url, headers=headers, data=data)


__all__ = [
    "ACCEPT_LANGUAGE",
    "ACCEPT_TOS_DOC_ID",
    "CHAT_URL",
    "GRAPHQL_URL",
    "LANDING_URL",
    "RequestSpec",
    "SEARCH_PLUGIN_DOC_ID",
    "SEND_MESSAGE_DOC_ID",
    "USER_AGENT",
    "accept_tos_request",
    "landing_request",
    "search_plugin_request",
    "send_message_request",
]
