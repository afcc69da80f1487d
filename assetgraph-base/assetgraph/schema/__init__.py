
from .core.operation import *
from .knowledge.assertion import *
from .services.asset import *

