"""
Fixed wire constants shared by the encoders.

GS1 tags follow the register's "GS1 Pack" layout:
    99MPUC<GS>240[GoodsId]<GS>37[Qty]|3103[Weight]<GS>98[Disc]<GS>21[UniqueID]<GS>97[DecPos]<GS>
"""

from __future__ import annotations

from typing import Tuple


# ASCII 29, transmitted by scanners for FNC1
GS_CHAR = '\x1d'
GS_VISIBLE = '<GS>'

GS1_PREFIX = '99MPUC'
AI_GTIN = '01'
AI_GOODS_ID = '240'
AI_QUANTITY = '37'
AI_WEIGHT = '3103'
AI_DISCOUNT = '98'
AI_UNIQUE_ID = '21'
AI_DECIMAL_POSITION = '97'

GOODS_ID_MAX_LENGTH = 8
QUANTITY_WIDTH = 8
WEIGHT_WIDTH = 6
DISCOUNT_WIDTH = 2
UNIQUE_ID_LENGTH = 8

UNIQUE_ID_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'
JUNK_ALPHABET = 'XYZQW!@#$%&*'

WEIGHT_PREFIXES: Tuple[str, ...] = ('77', '49', '22')

DEMO_GTINS: Tuple[str, ...] = (
    '4810099003310',
    '4600682000013',
    '5901234123457',
    '4006381333931',
    '4820000056786',
    '4607000300527',
)
