"""
Role-based screen access.

Each role sees a fixed set of tabs; the first one is where the app lands.
Unknown roles get the customer tabs.
"""

from typing import List, Optional, Union

from domain.enums import UserRole

ROLE_SCREENS = {
    UserRole.CUSTOMER.value: ["home", "discover", "subscriptions", "messages", "profile"],
    UserRole.MESS_OWNER.value: ["dashboard", "menu", "subscribers", "messages", "profile"],
    UserRole.ADMIN.value: ["overview", "messes", "settings"],
}


class NavigationService:
    @staticmethod
    def valid_screens(role: Union[UserRole, str, None]) -> List[str]:
        key = role.value if isinstance(role, UserRole) else role
        return list(ROLE_SCREENS.get(key, ROLE_SCREENS[UserRole.CUSTOMER.value]))

    @staticmethod
    def is_valid_screen(role: Union[UserRole, str, None], screen: str) -> bool:
        if role is None:
            return False
        return screen in NavigationService.valid_screens(role)

    @staticmethod
    def default_screen(role: Union[UserRole, str, None]) -> str:
        return NavigationService.valid_screens(role)[0]

    @staticmethod
    def resolve_redirect(
        role: Union[UserRole, str, None], current_path: str
    ) -> Optional[str]:
        """
        Screen to redirect to, or None when the current path is allowed.

        A path is allowed when it contains the name of any screen the role may open.
        """
        screens = NavigationService.valid_screens(role)
        path = current_path or ""
        if any(screen in path for screen in screens):
            return None
        return screens[0]
