
import logging

# Module logger
logger = logging.getLogger(__name__)

class StepHooks:
    """
    Progress sink for long-running asset operations.  after_hook receives
    {"status": <OperationStepStatuses value>, "data": {...}} once a step has
    finished.  Return values are ignored.
    """

    def after_hook(self, event):
        raise NotImplementedError()

class EmptyHooks(StepHooks):

    def after_hook(self, event):
        pass

class CallbackHooks(StepHooks):

    def __init__(self, callback):
        self.callback = callback

    def after_hook(self, event):
        self.callback(event)

class StepHookChain(StepHooks):
    """Delivers every event to each subscribed sink, in subscription order"""

    def __init__(self, *hooks):
        self.hooks = list(hooks)

    def subscribe(self, hook):
        if callable(hook) and not isinstance(hook, StepHooks):
            hook = CallbackHooks(hook)
        self.hooks.append(hook)
        return hook

    def unsubscribe(self, hook):
        self.hooks.remove(hook)

    def after_hook(self, event):

        logger.debug(
            f"Step {event.get('status')} -> {len(self.hooks)} subscriber(s)"
        )

        for hook in list(self.hooks):
            hook.after_hook(event)

