
from . manager import AssetOperationsManager, CreateWorkflow, CreateStates
from . options import AssetCreateOptions, AssetGetOptions
from . content import normalize_content

