import ulid


def new_id(prefix: str = "") -> str:
    """
    Generate a sortable, collision-resistant string id.

    ULIDs carry a millisecond timestamp plus 80 random bits, so two ids
    minted within the same millisecond still differ.
    """
    return prefix + str(ulid.new())
