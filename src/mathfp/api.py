## mathfp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Function, nil
from .errors import *
from .session import Session

_SESSION = Session()

def __getattr__(name):
    return getattr(_SESSION, name)
