import json

from authycli.output import Output, render_alfred, render_pretty
from authycli.token import Token


def test_title_prefers_token():
    output = Output(token=Token(name="GitHub", original_name="GitHub"), fallback_title="other")
    assert output.title() == "GitHub"


def test_title_falls_back_without_token():
    output = Output(fallback_title="OTP tokens not found")
    assert output.title() == "OTP tokens not found"


def test_alfred_subtitle_with_code():
    output = Output(code="123456", remain_secs=12)
    assert (
        output.alfred_subtitle()
        == "Code: 123456 [Press Enter copy to clipboard], Expires in 12 second(s)"
    )


def test_alfred_subtitle_with_error():
    output = Output(error="OTP token is empty")
    assert output.alfred_subtitle() == "OTP token is empty"


def test_to_alfred_fields():
    output = Output(token=Token(name="Mail"), code="654321", remain_secs=3)
    item = output.to_alfred()
    assert item["title"] == "Mail"
    assert item["arg"] == "654321"
    assert item["valid"] is True
    assert item["icon"] == {"type": "", "path": ""}
    assert item["text"] == {"copy": ""}
    assert list(item) == ["title", "subtitle", "arg", "icon", "valid", "text"]


def test_render_alfred_round_trip():
    outputs = [
        Output(token=Token(name="One"), code="111111", remain_secs=1),
        Output(fallback_title="Two", error="Please try another keyword"),
    ]
    document = json.loads(render_alfred(outputs))
    assert [item["title"] for item in document["items"]] == ["One", "Two"]
    assert document["items"][1]["subtitle"] == "Please try another keyword"


def test_render_alfred_empty():
    assert json.loads(render_alfred([])) == {"items": []}


def test_render_pretty_code_line():
    text = render_pretty([Output(token=Token(name="Mail"), code="654321", remain_secs=7)])
    assert text.startswith("\n")
    assert "- Title: \033[1;32mMail\033[0m\n" in text
    assert "- Code: \033[1;36m654321\033[0m Expires in \033[1;31m7\033[0m(s)\n\n" in text


def test_render_pretty_error_line():
    text = render_pretty([Output(fallback_title="Missing", error="OTP token is empty")])
    assert "- OTP token is empty\n\n" in text
    assert "Code:" not in text