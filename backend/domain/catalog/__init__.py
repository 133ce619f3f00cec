"""
Catalog Domain - Electronic-code items (전산코드).

Items are classified by division, industry, part group and revision; the
electronic code is derived from that classification plus a sequence number.
"""
