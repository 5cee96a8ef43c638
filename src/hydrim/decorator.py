from hydrim.registry import TypeRegistry


def register(cls):
    """Convenience decorator to register a type so that it can be hydrated
    by name and referenced by name in string annotations

    Example:

    ```python
    from hydrim import Hydrator, register

    @register
    @dataclass
    class Item:
        item_id: int
        name: str

    item = Hydrator().hydrate("Item", {"item_id": 1, "name": "foo"})
    ```
    """
    TypeRegistry().register(cls)
    return cls
