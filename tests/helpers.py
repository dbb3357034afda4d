def type_text(target, text: str) -> None:
    """Feed characters one at a time to a FieldEditor or TaskForm."""
    insert = getattr(target, "insert_char", None) or target.add_char
    for ch in text:
        insert(ch)
