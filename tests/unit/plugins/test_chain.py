"""
Tests for PluginChain ordering and error flow.
"""

import pytest

from instagram_client.core.async_transport import AsyncTransport
from instagram_client.core.transport import RawResponse, Request, Transport
from instagram_client.plugins import Plugin, PluginChain


class RecordingPlugin(Plugin):
    """Appends every phase to a shared journal."""

    def __init__(self, name, journal):
        self.name = name
        self.journal = journal

    def before_request(self, request):
        self.journal.append(f"{self.name}.before")
        return request.with_header(f"X-{self.name}", "1")

    def after_response(self, request, response):
        self.journal.append(f"{self.name}.after")
        return response

    def on_error(self, request, error):
        self.journal.append(f"{self.name}.error")
        return error


class StubTransport(Transport):

    def __init__(self, journal, result):
        self.journal = journal
        self.result = result
        self.sent = []

    def send(self, request):
        self.journal.append("transport")
        self.sent.append(request)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class StubAsyncTransport(AsyncTransport):

    def __init__(self, journal, result):
        self.journal = journal
        self.result = result

    async def send(self, request):
        self.journal.append("transport")
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


REQUEST = Request("GET", "https://api.instagram.com/v1/users/self")


def build(journal, *names):
    return PluginChain([RecordingPlugin(name, journal) for name in names])


class TestOrdering:

    def test_two_phase_order(self):
        journal = []
        response = RawResponse(200, {}, b"{}")
        chain = build(journal, "a", "b", "c")

        result = chain.send(REQUEST, StubTransport(journal, response))

        assert result is response
        assert journal == [
            "a.before", "b.before", "c.before",
            "transport",
            "c.after", "b.after", "a.after",
        ]

    def test_transport_sees_all_modifications(self):
        journal = []
        transport = StubTransport(journal, RawResponse(200))
        build(journal, "a", "b").send(REQUEST, transport)

        sent = transport.sent[0]
        assert sent.header("X-a") == "1"
        assert sent.header("X-b") == "1"

    def test_empty_chain(self):
        journal = []
        response = RawResponse(204)
        assert PluginChain().send(REQUEST, StubTransport(journal, response)) is response
        assert len(PluginChain()) == 0

    def test_after_response_receives_own_request(self):
        seen = {}

        class Inspect(Plugin):
            def after_response(self, request, response):
                seen["headers"] = dict(request.headers)
                return response

        class AddHeader(Plugin):
            def before_request(self, request):
                return request.with_header("X-Inner", "1")

        chain = PluginChain([Inspect(), AddHeader()])
        chain.send(REQUEST, StubTransport([], RawResponse(200)))

        assert "X-Inner" not in seen["headers"]

    def test_response_replacement_flows_outward(self):
        class Replace(Plugin):
            def after_response(self, request, response):
                return response.replace(status_code=503)

        journal = []
        chain = PluginChain([RecordingPlugin("outer", journal), Replace()])
        result = chain.send(REQUEST, StubTransport(journal, RawResponse(200)))

        assert result.status_code == 503


class TestErrors:

    def test_transport_error_flows_through_on_error(self):
        journal = []
        error = ConnectionError("refused")
        chain = build(journal, "a", "b")

        with pytest.raises(ConnectionError) as exc_info:
            chain.send(REQUEST, StubTransport(journal, error))

        assert exc_info.value is error
        assert journal == ["a.before", "b.before", "transport", "b.error", "a.error"]

    def test_before_request_error_aborts_without_on_error(self):
        journal = []

        class Boom(Plugin):
            def before_request(self, request):
                raise RuntimeError("stop")

        chain = PluginChain([RecordingPlugin("a", journal), Boom(), RecordingPlugin("c", journal)])

        with pytest.raises(RuntimeError, match="stop"):
            chain.send(REQUEST, StubTransport(journal, RawResponse(200)))

        assert journal == ["a.before"]

    def test_after_response_error_switches_to_error_mode(self):
        journal = []

        class Boom(Plugin):
            def after_response(self, request, response):
                raise ValueError("bad response")

        chain = PluginChain([RecordingPlugin("a", journal), Boom(), RecordingPlugin("c", journal)])

        with pytest.raises(ValueError, match="bad response"):
            chain.send(REQUEST, StubTransport(journal, RawResponse(200)))

        assert journal == ["a.before", "c.before", "transport", "c.after", "a.error"]

    def test_on_error_replacement(self):
        class Translate(Plugin):
            def on_error(self, request, error):
                return LookupError(f"translated: {error}")

        journal = []
        chain = PluginChain([RecordingPlugin("a", journal), Translate()])

        with pytest.raises(LookupError, match="translated: refused"):
            chain.send(REQUEST, StubTransport(journal, ConnectionError("refused")))

    def test_on_error_raising_replaces_error(self):
        class Raise(Plugin):
            def on_error(self, request, error):
                raise KeyError("from hook")

        with pytest.raises(KeyError):
            PluginChain([Raise()]).send(REQUEST, StubTransport([], ConnectionError("refused")))

    def test_on_error_non_exception_ignored(self):
        class ReturnsNone(Plugin):
            def on_error(self, request, error):
                return None

        with pytest.raises(ConnectionError):
            PluginChain([ReturnsNone()]).send(REQUEST, StubTransport([], ConnectionError("refused")))


class TestAsync:

    @pytest.mark.asyncio
    async def test_same_order_as_sync(self):
        journal = []
        response = RawResponse(200)
        chain = build(journal, "a", "b")

        result = await chain.send_async(REQUEST, StubAsyncTransport(journal, response))

        assert result is response
        assert journal == ["a.before", "b.before", "transport", "b.after", "a.after"]

    @pytest.mark.asyncio
    async def test_error_flow(self):
        journal = []
        chain = build(journal, "a", "b")

        with pytest.raises(TimeoutError):
            await chain.send_async(REQUEST, StubAsyncTransport(journal, TimeoutError("slow")))

        assert journal == ["a.before", "b.before", "transport", "b.error", "a.error"]
