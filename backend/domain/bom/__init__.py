"""
BOM Domain - Bill of Materials lines.

Each line links a child electronic code to the code of its parent
assembly (empty for top-level lines):
- lines reference catalog items by code only, without a foreign key
- display fields are copied from the item when its code is selected
- parent links are free-form; dangling parents and cycles are representable
"""
