"""
Tests for the usage example script.
"""

import requests

import example


def _queue_happy_path(transport):
    transport.reply(body={"status": "success", "shorturl": "http://sho.rt/custom-keyword"})
    transport.reply(body={"statusCode": 200, "longurl": "http://example.com"})
    transport.reply(body={"statusCode": 200, "link": {
        "clicks": "3",
        "timestamp": "2024-01-02 03:04:05",
        "ip": "127.0.0.1",
        "url": "http://example.com",
        "shorturl": "http://sho.rt/custom-keyword",
    }})
    transport.reply(body={"statusCode": 200, "db-stats": {"total_links": "1", "total_clicks": "3"}})
    transport.reply(body={"statusCode": 200, "links": {}})
    transport.reply(body={"statusCode": 200, "keywords": ["custom-keyword"]})
    transport.reply(body={"statusCode": 200, "message": "success: updated"})
    transport.reply(body={"statusCode": 200, "message": "success: deleted"})


class TestExampleMain:

    def test_all_actions_succeed(self, client, transport, capsys):
        _queue_happy_path(transport)
        assert example.main(client) == 0

        actions = [call["data"]["action"] for call in transport.calls]
        assert actions == [
            "shorturl", "expand", "url-stats", "db-stats",
            "stats", "lookup-url-substr", "update", "delete",
        ]
        out = capsys.readouterr().out
        assert "http://sho.rt/custom-keyword" in out
        assert "2024-01-02 03:04:05" in out

    def test_failures_are_counted_not_raised(self, client, transport, capsys):
        for _ in range(8):
            transport.fail(requests.exceptions.ConnectionError("server down"))
        assert example.main(client) == 8
        assert "server down" in capsys.readouterr().out


class TestClientFromEnv:

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("YOURLS_API_URL", "https://links.example.org/yourls-api.php/")
        monkeypatch.setenv("YOURLS_USERNAME", "admin")
        monkeypatch.setenv("YOURLS_PASSWORD", "secret")
        monkeypatch.setenv("YOURLS_TIMEOUT", "3")

        client = example.client_from_env()
        assert client.api_url == "https://links.example.org/yourls-api.php"
        assert client.domain == "https://links.example.org"
        assert client.username == "admin"
        assert client.password == "secret"
        assert client.timeout == 3.0
