import pytest
from unittest.mock import MagicMock
import json

from hissatsu.skill_service.parsing import FALLBACK_NAME, FALLBACK_TAGLINE, FALLBACK_DESCRIPTION


def make_completion(content):
    completion = MagicMock()
    completion.choices[0].message.content = content
    return completion


@pytest.mark.parametrize("payload", [
    {},
    {"intro": ""},
    {"intro": "   \n\t"},
    {"intro": None},
    {"intro": 42},
    ["hi"],
    "hello",
    42,
])
def test_generate_skill_requires_intro(client, mock_openai, payload):
    response = client.post("/api/generate-skill", json=payload)
    assert response.status_code == 400
    assert response.get_json()["error"] == "intro is required"
    assert mock_openai.chat.completions.create.call_count == 0


def test_generate_skill_non_json_body(client, mock_openai):
    response = client.post("/api/generate-skill", data="intro=hello", content_type="text/plain")
    assert response.status_code == 400
    assert mock_openai.chat.completions.create.call_count == 0


def test_generate_skill_json_mode_success(client, mock_openai):
    mock_openai.chat.completions.create.return_value = make_completion(json.dumps({
        "name": "猫愛無双ギャラクシーバースト",
        "tagline": "肉球は宇宙を救う",
        "description": "猫への愛を銀河規模に放出する。敵は癒される。",
        "extra": "ignored",
    }))

    response = client.post("/api/generate-skill", json={"intro": "猫が好きなエンジニアです"})
    assert response.status_code == 200
    data = response.get_json()
    assert set(data.keys()) == {"name", "tagline", "description"}
    assert data["name"] == "猫愛無双ギャラクシーバースト"
    assert all(isinstance(v, str) and v for v in data.values())

    kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0]["role"] == "system"
    assert "猫が好きなエンジニアです" in kwargs["messages"][1]["content"]


def test_generate_skill_json_mode_fills_missing_fields(client, mock_openai):
    mock_openai.chat.completions.create.return_value = make_completion(json.dumps({"name": "技"}))

    response = client.post("/api/generate-skill", json={"intro": "hello"})
    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "技"
    assert data["tagline"] == FALLBACK_TAGLINE
    assert data["description"] == FALLBACK_DESCRIPTION


def test_generate_skill_malformed_json_is_server_error(client, mock_openai):
    mock_openai.chat.completions.create.return_value = make_completion("not json {")

    response = client.post("/api/generate-skill", json={"intro": "hello"})
    assert response.status_code == 500
    assert response.get_json()["error"] == "AI request failed"


def test_generate_skill_provider_failure_then_recovers(client, mock_openai):
    mock_openai.chat.completions.create.side_effect = [
        ConnectionError("network down"),
        make_completion(json.dumps({"name": "a", "tagline": "b", "description": "c"})),
    ]

    first = client.post("/api/generate-skill", json={"intro": "hello"})
    assert first.status_code == 500
    assert "error" in first.get_json()

    second = client.post("/api/generate-skill", json={"intro": "hello"})
    assert second.status_code == 200
    assert second.get_json() == {"name": "a", "tagline": "b", "description": "c"}


def test_generate_skill_text_mode(text_mode_client, mock_openai):
    mock_openai.chat.completions.create.return_value = make_completion(
        "技名：残業無双デッドラインブレイカー\n"
        "キャッチコピー：締切は俺が決める\n"
        "説明：終わらない仕事を一撃で終わらせる。\nただし翌日も仕事はある。"
    )

    response = text_mode_client.post("/api/generate-skill", json={"intro": "会社員です"})
    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "残業無双デッドラインブレイカー"
    assert data["tagline"] == "締切は俺が決める"
    assert data["description"] == "終わらない仕事を一撃で終わらせる。\nただし翌日も仕事はある。"

    kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert "response_format" not in kwargs


def test_generate_skill_text_mode_unlabelled_output(text_mode_client, mock_openai):
    mock_openai.chat.completions.create.return_value = make_completion("Sorry, I cannot help.")

    response = text_mode_client.post("/api/generate-skill", json={"intro": "hello"})
    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == FALLBACK_NAME
    assert data["tagline"] == FALLBACK_TAGLINE
    assert data["description"] == FALLBACK_DESCRIPTION
