"""
Member name conversion.

C# members are PascalCase; the JSON produced for them (and therefore the
TypeScript that describes it) is camelCase. Leading acronyms keep their
boundary with the next word:
- Name -> name
- Id -> id
- URLPath -> urlPath
- IOStream -> ioStream
- ID -> id

A leading run made only of capitals (ID, URL) has no following word to keep
its last letter, so the whole run is lower-cased. This is the contract for
all-capital names: ID -> id, not iD.
"""


def to_member_case(name: str) -> str:
    """
    Convert a declared member name to lowerCamel form.

    Args:
        name: The member name as declared (e.g., "URLPath")

    Returns:
        The converted name (e.g., "urlPath")
    """
    if not name or not name[0].isupper():
        return name

    run = 0
    while run < len(name) and name[run].isupper():
        run += 1

    if run == 1:
        return name[0].lower() + name[1:]

    # The last capital of a run belongs to the next word when a lower-case letter follows
    if run < len(name) and name[run].islower():
        return name[:run - 1].lower() + name[run - 1:]
    return name[:run].lower() + name[run:]
