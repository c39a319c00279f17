import json

from metaai.client import payloads


def test_access_token_variables_are_fixed():
    spec = payloads.accept_tos_request("lsd-token", "cookie=1")

    assert spec.method == "POST"
    assert spec.url == "https://www.meta.ai/api/graphql/"
    assert spec.data == {
        "lsd": "lsd-token",
        "variables": '{"dob":"1997-01-01","icebreaker_type":"TEXT",'
        '"__relay_internal__pv__WebPixelRatiorelayprovider":1}',
        "server_timestamps": "true",
        "doc_id": "7604648749596940",
    }
    assert spec.headers["x-fb-friendly-name"] == "useAbraAcceptTOSForTempUserMutation"


def test_send_message_variables_match_web_client():
    spec = payloads.send_message_request(
        "hello",
        access_token="tok",
        lsd="lsd",
        cookies="c=1",
        conversation_id="conv",
        threading_id="1234567890123456789",
    )

    assert spec.url == "https://graph.meta.ai/graphql?locale=user"
    assert spec.data["variables"] == (
        '{"message":{"sensitive_string_value":"hello"},"externalConversationId":"conv",'
        '"offlineThreadingId":"1234567890123456789","suggestedPromptIndex":null,'
        '"flashVideoRecapInput":{"images":[]},"flashPreviewInput":null,"promptPrefix":null,'
        '"entrypoint":"ABRA__CHAT__TEXT","icebreaker_type":"TEXT",'
        '"__relay_internal__pv__AbraDebugDevOnlyrelayprovider":false,'
        '"__relay_internal__pv__WebPixelRatiorelayprovider":1}'
    )
    assert {key: spec.data[key] for key in ("dpr", "jazoest", "fb_api_caller_class", "doc_id")} == {
        "dpr": "1",
        "jazoest": "2925",
        "fb_api_caller_class": "useAbraSendMessageMutation",
        "doc_id": "7783822248314888",
    }
    assert spec.headers["user-agent"] == payloads.USER_AGENT


def test_send_message_keeps_non_ascii_text():
    spec = payloads.send_message_request(
        "¿qué tal?",
        access_token="tok",
        lsd="lsd",
        cookies="c=1",
        conversation_id="conv",
        threading_id="1",
    )

    assert "¿qué tal?" in spec.data["variables"]
    assert json.loads(spec.data["variables"])["message"]["sensitive_string_value"] == "¿qué tal?"


def test_search_plugin_request_body():
    spec = payloads.search_plugin_request("fid", access_token="tok", lsd="lsd", cookies="c=1")

    assert spec.data["variables"] == '{"abraMessageFetchID":"fid"}'
    assert spec.data["av"] == "0"
    assert spec.data["fbi_api_caller_class"] == "RelayModern"
    assert spec.data["fbi_api_req_friendly_name"] == "AbraSearchPluginDialogQuery"
    assert spec.headers["cookie"] == "c=1"


def test_landing_request_has_no_body():
    spec = payloads.landing_request()

    assert spec.method == "GET"
    assert spec.data is None
    assert spec.headers["sec-fetch-mode"] == "navigate"
