# File: tests/test_extractor.py
from link_scout.crawler.extractor import absolute_url, extract_events
from link_scout.crawler.models import (
    FormActionFound,
    FormInput,
    FormParsed,
    FormRecord,
    LinkFound,
    PageData,
    ScriptFound,
)


def test_absolute_url():
    base = "https://host/dir/page"
    assert absolute_url(base, "/a") == "https://host/a"
    assert absolute_url(base, "b?x=1#frag") == "https://host/dir/b?x=1"
    assert absolute_url(base, "//cdn.host/c.js") == "https://cdn.host/c.js"
    assert absolute_url(base, "#only-fragment") == ""
    assert absolute_url(base, None) == ""
    assert absolute_url(base, "") == base


def test_extract_events_order_and_resolution(mock_page_data):
    events = extract_events(mock_page_data)

    assert events[:3] == [
        LinkFound("http://example.com/link1"),
        LinkFound(""),
        LinkFound("http://external.com/x"),
    ]
    assert events[3] == ScriptFound("http://example.com/dir/js/app.js")
    assert events[4] == FormActionFound("http://example.com/login")
    assert [type(e) for e in events[5:]] == [FormParsed, FormParsed]
    assert len(events) == 7


def test_form_parsing(mock_page_data):
    forms = [e.form for e in extract_events(mock_page_data) if isinstance(e, FormParsed)]

    login, anonymous = forms
    assert login == FormRecord(
        url="http://example.com/login",
        method="POST",
        inputs=(
            FormInput("text", "user", ""),
            FormInput("password", "pass", "secret"),
            FormInput("text", "comment", ""),
        ),
    )
    # no action resolves to the page itself, no method stays blank
    assert anonymous.url == "http://example.com/dir/page"
    assert anonymous.method == ""
    assert anonymous.inputs == (FormInput("hidden", "token", "abc"),)


def test_form_format():
    form = FormRecord(
        url="https://host/login",
        method="POST",
        inputs=(FormInput("text", "user"), FormInput("password", "pass")),
    )
    assert form.format() == "POST https://host/login Inputs: text user password pass"
    assert form.signature == "POSThttps://host/login"
    assert FormRecord(url="https://host/", method="").format() == " https://host/ Inputs:"


def test_base_href_is_honoured():
    page = PageData(
        url="https://example.com/index.html",
        content='<head><base href="https://cdn.example.com/assets/"></head>'
        '<a href="x.html">x</a><script src="/app.js"></script>',
    )
    assert extract_events(page) == [
        LinkFound("https://cdn.example.com/assets/x.html"),
        ScriptFound("https://cdn.example.com/app.js"),
    ]


def test_form_action_event_requires_attribute():
    page = PageData(url="https://example.com/", content='<form action=""></form><form></form>')
    events = extract_events(page)
    assert events.count(FormActionFound("https://example.com/")) == 1
    assert sum(isinstance(e, FormParsed) for e in events) == 2
