"""Store exceptions for the favorites bounded context.

Infrastructure translates every driver or ORM failure into these exceptions.
Group operations catch them at their public boundary and hand them to the
ErrorDispatcher, so they never reach callers of the domain API.
"""


class StoreAccessError(Exception):
    """Raised when attaching, querying or committing against the store fails.

    Covers connectivity problems, constraint violations and concurrency
    conflicts alike.
    """

    pass


class GroupNotFoundError(StoreAccessError):
    """Raised when a group cannot be attached because its row no longer exists.

    Usually means another writer deleted the group after it was loaded into
    the current Forest.
    """

    def __init__(self, group_id: int):
        super().__init__(f"Group {group_id} does not exist in the store")
        self.group_id = group_id
