from elastic_cli_impl.elastic_impl import ElasticActions, get_client

__all__ = ["ElasticActions", "get_client"]
