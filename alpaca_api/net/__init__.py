from .http import encode_query_string, new_client, read_json, send

__all__ = ["encode_query_string", "new_client", "read_json", "send"]
