
from . manager import GraphOperationsManager

