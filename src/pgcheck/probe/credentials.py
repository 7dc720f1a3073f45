"""
Credential resolution: explicit options, or an entry of a .pgpass file.

File format (one entry per line)::

    hostname:port:database:username:password

`#` starts a comment line, `\\:` and `\\\\` escape a colon and a backslash.
"""
import logging
from pathlib import Path
from typing import List, Optional
from ..config import CheckConfig
from ..domain.models import Credentials, PasswordFileEntry
from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

FIELDS = ("hostname", "port", "database", "username", "password")
WILDCARD = "*"

def _split_fields(line: str) -> List[str]:
    fields = []
    current = []
    escaped = False
    for ch in line:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields

def parse_passfile(content: str) -> List[PasswordFileEntry]:
    """
    Parse .pgpass content. Missing trailing fields are left empty;
    lines with too many fields are skipped instead of failing the file.
    """
    entries = []
    for lineno, line in enumerate(content.splitlines(), start=1):
        line = line.rstrip("\r")
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        fields = _split_fields(line)
        if len(fields) > len(FIELDS):
            # never echo the line itself, it carries a password
            logger.warning("Skipping malformed pgpass line %d: %d fields", lineno, len(fields))
            continue
        fields += [""] * (len(FIELDS) - len(fields))
        entries.append(PasswordFileEntry(**dict(zip(FIELDS, fields))))
    return entries

def read_passfile(path: Path) -> List[PasswordFileEntry]:
    if not path.exists():
        raise ConfigError(f"unable to open the supplied config file {path}")
    try:
        content = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"error parsing pgpass file {path}: {e}")
    return parse_passfile(content)

def parse_port(port: str) -> int:
    """Entries keep the port as text; anything that is not a number becomes 0."""
    try:
        return int(port)
    except ValueError:
        logger.warning("Invalid port %r in pgpass entry, using 0", port)
        return 0

def _field_matches(pattern: str, value: str) -> bool:
    return pattern == WILDCARD or pattern == value

def find_matching_entry(entries: List[PasswordFileEntry], config: CheckConfig) -> Optional[PasswordFileEntry]:
    """First entry matching host, port, database and user, '*' matching anything."""
    for entry in entries:
        if (
            _field_matches(entry.hostname, config.hostname)
            and (entry.port == WILDCARD or parse_port(entry.port) == config.port)
            and _field_matches(entry.database, config.database)
            and _field_matches(entry.username, config.user)
        ):
            return entry
    return None

class CredentialResolver:
    """
    SRP: Responsible only for turning configuration into Credentials.
    """
    def resolve(self, config: CheckConfig) -> Credentials:
        if config.pgpass is None:
            return Credentials(
                user=config.user,
                password=config.password,
                host=config.hostname,
                port=config.port,
                database=config.database,
                sslmode=config.sslmode,
            )

        entries = read_passfile(config.pgpass)
        if not entries:
            raise ConfigError(f"error parsing pgpass file {config.pgpass}: no entries found")

        if config.pgpass_match:
            return self._resolve_matching(entries, config)

        # The last entry read wins; entries are not matched against host/port/database.
        entry = entries[-1]
        logger.debug("Using last of %d pgpass entries", len(entries))
        return Credentials(
            user=entry.username,
            password=entry.password,
            host=entry.hostname,
            port=parse_port(entry.port),
            database=entry.database,
            sslmode=config.sslmode,
        )

    def _resolve_matching(self, entries: List[PasswordFileEntry], config: CheckConfig) -> Credentials:
        entry = find_matching_entry(entries, config)
        if entry is None:
            raise ConfigError(
                f"no pgpass entry in {config.pgpass} matches "
                f"{config.hostname}:{config.port}:{config.database}:{config.user}"
            )
        # matched fields equal the configured target or are wildcards, only the password is taken
        return Credentials(
            user=config.user,
            password=entry.password,
            host=config.hostname,
            port=config.port,
            database=config.database,
            sslmode=config.sslmode,
        )
