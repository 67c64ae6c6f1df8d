"""cpsearch — REST façade over OpenSearch for postal-code lookup and autocomplete."""

__version__ = "0.1.0"
