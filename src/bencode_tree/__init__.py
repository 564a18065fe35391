"""
Bencode package for encoding and decoding canonical Bencode value trees.
"""
import logging

from .decoder import DEFAULT_MAX_DEPTH, BencodeDecoder, decode, decode_prefix
from .encoder import encode, encode_to
from .errors import (
    BencodeDecodeError,
    DuplicateKey,
    InvalidToken,
    MalformedInteger,
    MalformedLength,
    NestingTooDeep,
    TrailingData,
    TruncatedInput,
)
from .keys import compare_keys
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, from_native

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'decode', 'decode_prefix', 'encode', 'encode_to', 'from_native', 'compare_keys',
    'BencodeDecoder', 'DEFAULT_MAX_DEPTH',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeDecodeError', 'InvalidToken', 'MalformedInteger', 'MalformedLength',
    'TruncatedInput', 'TrailingData', 'DuplicateKey', 'NestingTooDeep',
]
