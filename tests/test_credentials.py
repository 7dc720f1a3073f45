import pytest
from sqlalchemy.engine import make_url
from pgcheck.config import CheckConfig
from pgcheck.domain.models import Credentials
from pgcheck.exceptions import ConfigError
from pgcheck.probe.credentials import CredentialResolver, parse_passfile, parse_port

def write_pgpass(tmp_path, content):
    path = tmp_path / ".pgpass"
    path.write_text(content)
    return path

def test_direct_fields_are_copied_verbatim():
    config = CheckConfig(
        user="monitor", password="s3cret", hostname="db1", port=6432,
        database="app", sslmode="require",
    )
    credentials = CredentialResolver().resolve(config)

    assert credentials == Credentials(
        user="monitor", password="s3cret", host="db1", port=6432,
        database="app", sslmode="require",
    )

def test_last_pgpass_entry_wins(tmp_path):
    """Two entries for different hosts: the last one read is used, not a host match."""
    path = write_pgpass(tmp_path, "db1:5432:app:alice:pw1\ndb2:5433:reports:bob:pw2\n")
    config = CheckConfig(hostname="db1", port=5432, database="app", user="alice", pgpass=path)

    credentials = CredentialResolver().resolve(config)

    assert credentials.host == "db2"
    assert credentials.port == 5433
    assert credentials.database == "reports"
    assert credentials.user == "bob"
    assert credentials.password == "pw2"

def test_pgpass_overrides_direct_fields_but_not_sslmode(tmp_path):
    path = write_pgpass(tmp_path, "db9:5439:other:carol:pw\n")
    config = CheckConfig(user="ignored", password="ignored", pgpass=path, sslmode="verify-full")

    credentials = CredentialResolver().resolve(config)

    assert credentials.user == "carol"
    assert credentials.sslmode == "verify-full"

def test_malformed_port_falls_back_to_zero(tmp_path):
    path = write_pgpass(tmp_path, "db1:abc:app:alice:pw\n")
    credentials = CredentialResolver().resolve(CheckConfig(pgpass=path))
    assert credentials.port == 0

def test_missing_pgpass_file(tmp_path):
    config = CheckConfig(pgpass=tmp_path / "nope")
    with pytest.raises(ConfigError, match="unable to open the supplied config file"):
        CredentialResolver().resolve(config)

def test_pgpass_without_entries(tmp_path):
    path = write_pgpass(tmp_path, "# only a comment\n\n")
    with pytest.raises(ConfigError, match="no entries found"):
        CredentialResolver().resolve(CheckConfig(pgpass=path))

def test_parse_skips_comments_and_blank_lines():
    entries = parse_passfile("# header\n\nlocalhost:5432:postgres:me:pw\r\n")
    assert len(entries) == 1
    assert entries[0].password == "pw"

def test_parse_handles_escapes():
    entries = parse_passfile(r"host:5432:db:user:pa\:ss\\word")
    assert entries[0].password == "pa:ss\\word"

def test_parse_pads_missing_fields():
    entries = parse_passfile("host:5432:db:user")
    assert entries[0].username == "user"
    assert entries[0].password == ""

def test_parse_skips_lines_with_too_many_fields():
    entries = parse_passfile("a:1:b:c:d:e\nhost:5432:db:user:pw\n")
    assert [e.hostname for e in entries] == ["host"]

@pytest.mark.parametrize("text, expected", [("5432", 5432), ("*", 0), ("", 0), ("12x", 0)])
def test_parse_port(text, expected):
    assert parse_port(text) == expected

class TestMatchingEntry:
    CONTENT = (
        "db1:5432:app:alice:pw1\n"
        "*:*:*:monitor:wild\n"
        "db2:5433:reports:bob:pw2\n"
    )

    def test_exact_match(self, tmp_path):
        path = write_pgpass(tmp_path, self.CONTENT)
        config = CheckConfig(hostname="db1", port=5432, database="app", user="alice",
                             pgpass=path, pgpass_match=True)

        credentials = CredentialResolver().resolve(config)

        assert credentials.password == "pw1"
        assert credentials.host == "db1"

    def test_wildcard_match_uses_configured_target(self, tmp_path):
        path = write_pgpass(tmp_path, self.CONTENT)
        config = CheckConfig(hostname="db7", port=6543, database="metrics", user="monitor",
                             pgpass=path, pgpass_match=True)

        credentials = CredentialResolver().resolve(config)

        assert credentials.password == "wild"
        assert (credentials.host, credentials.port, credentials.database) == ("db7", 6543, "metrics")

    def test_port_matches_numerically(self, tmp_path):
        path = write_pgpass(tmp_path, "db1:05432:app:alice:padded\n")
        config = CheckConfig(hostname="db1", port=5432, database="app", user="alice",
                             pgpass=path, pgpass_match=True)

        assert CredentialResolver().resolve(config).password == "padded"

    def test_no_match(self, tmp_path):
        path = write_pgpass(tmp_path, self.CONTENT)
        config = CheckConfig(hostname="db3", user="eve", pgpass=path, pgpass_match=True)

        with pytest.raises(ConfigError, match="no pgpass entry"):
            CredentialResolver().resolve(config)

def test_connection_string_quotes_secrets():
    credentials = Credentials(user="mon itor", password="p@ss:w/rd", host="db1", port=5432,
                              database="app", sslmode="disable")

    url = make_url(credentials.connection_string)

    assert (url.username, url.password, url.host, url.port, url.database) == (
        "mon itor", "p@ss:w/rd", "db1", 5432, "app",
    )
    assert url.query["sslmode"] == "disable"

def test_connection_string_pins_the_declared_driver():
    credentials = Credentials(user="monitor", password="pw")
    assert make_url(credentials.connection_string).get_dialect().driver == "psycopg2"

@pytest.mark.parametrize("host", ["::1", "2001:db8::5"])
def test_connection_string_brackets_ipv6_hosts(host):
    credentials = Credentials(user="monitor", password="pw", host=host, port=6432)

    url = make_url(credentials.connection_string)

    assert url.host == host
    assert url.port == 6432

def test_repr_hides_password():
    credentials = Credentials(user="monitor", password="topsecret")
    assert "topsecret" not in repr(credentials)
    assert "topsecret" not in str(credentials)
