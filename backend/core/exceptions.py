class CocktailBookError(Exception):
    """Base exception for cocktail book errors"""
    status_code = 500


class ValidationError(CocktailBookError):
    """Missing required field or rejected upload"""
    status_code = 400


class NotFoundError(CocktailBookError):
    """Unknown or malformed record identifier"""
    status_code = 404


class StorageError(CocktailBookError):
    """Database or file storage errors"""
    status_code = 500
