
from . service import ValidationService

