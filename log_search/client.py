"""Builds the single Elasticsearch client shared by the whole session."""

import logging

from elasticsearch import Elasticsearch

from log_search.config import SearchConfig

logger = logging.getLogger(__name__)


def create_client(config: SearchConfig) -> Elasticsearch:
    kwargs = {
        "verify_certs": config.verify_certs,
        "request_timeout": config.request_timeout,
    }
    if config.username:
        kwargs["basic_auth"] = (config.username, config.password or "")
    if config.ca_certs:
        kwargs["ca_certs"] = config.ca_certs

    logger.info("Connecting to %s (verify_certs=%s)",
                ", ".join(config.hosts), config.verify_certs)
    return Elasticsearch(config.hosts, **kwargs)
