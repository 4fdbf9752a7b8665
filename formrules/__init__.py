"""formrules: declarative document validation.

Usage:
    from formrules import FormValidator, Rules, rules, Required, IsString, MinValue

    form = (
        FormValidator()
        .add("name", rules(Required(), IsString()))
        .add("age", Rules().add(MinValue(18)).default(21))
    )
"""
from formrules.validation import *  # noqa: F401,F403
from formrules.validation import __all__ as _validation_all

__version__ = "0.1.0"

__all__ = [*_validation_all, "__version__"]
