
from . manager import NodeOperationsManager

