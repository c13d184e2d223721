"""
Input State: Latched keyboard actions for the player car
"""

KEY_BINDINGS = (
    ('a', 'left'),
    ('d', 'right'),
    ('w', 'up'),
    ('s', 'down'),
)


class InputState:
    """
    Holds one on/off flag per action.

    A flag stays on from key-down until key-up, however many ticks pass
    in between.
    """

    def __init__(self, bindings=KEY_BINDINGS):
        self.bindings = dict(bindings)
        self.actions = {action: False for _, action in bindings}

    def set_key(self, key, pressed):
        """Latch or release the action bound to key. Unbound keys are ignored."""
        action = self.bindings.get(key)
        if action is not None:
            self.actions[action] = pressed

    def hold(self, action, pressed=True):
        """Latch an action directly (headless runs)."""
        if action not in self.actions:
            raise KeyError(f"Unknown action: {action!r}")
        self.actions[action] = pressed

    def release_all(self):
        for action in self.actions:
            self.actions[action] = False

    def get_action_states(self):
        """Snapshot of every action's current flag."""
        return dict(self.actions)
