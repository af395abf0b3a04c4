__version__ = "0.4.0"
__description__ = "jsonapi-compound : JSON:API compound documents for arbitrary object graphs"
