class PgCheckException(Exception):
    """Base Exception Class"""
    pass

class ConfigError(PgCheckException):
    """Configuration Error (bad port, missing pgpass file, invalid options)"""
    pass

class ConnectionError(PgCheckException):
    """Connection Failure"""
    pass

class LivenessError(PgCheckException):
    """Server accepted the connection but did not answer a ping"""
    pass

class QueryError(PgCheckException):
    """Introspection query failed or returned an unusable value"""
    def __init__(self, query_name: str, message: str):
        super().__init__(message)
        self.query_name = query_name
