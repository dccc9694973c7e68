from textual.message import Message

from db.models import ShoppingState


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class StateChangedMessage(Message):
    """
    Posted by the app to the active screen after every state transition.
    Screens listen to it to re-render from the new snapshot; inactive
    screens catch up on ScreenResume.
    """

    bubble = False

    def __init__(self, old_state: ShoppingState, new_state: ShoppingState) -> None:
        super().__init__()
        self.old_state = old_state
        self.new_state = new_state

    @property
    def cart_changed(self) -> bool:
        return self.old_state.cart is not self.new_state.cart

    @property
    def wishlist_changed(self) -> bool:
        return self.old_state.wishlist is not self.new_state.wishlist


class ModeSwitchedMessage(Message):
    """
    fired whenever switch_mode is called
    must be fired from app level
    """

    bubble = True

    def __init__(self, old_mode: str, new_mode: str) -> None:
        super().__init__()
        self.old_mode = old_mode
        self.new_mode = new_mode
