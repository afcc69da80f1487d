
from . blockchain import Blockchain, BlockchainService
from . node_api import NodeApiService
from . operation_poller import OperationPoller
from . step_hooks import StepHooks, EmptyHooks, CallbackHooks, StepHookChain
from . ual import derive_ual, resolve_ual, split_ual

