"""solrid — Multi-field identifier connector for Apache Solr."""

__version__ = "0.1.0"
