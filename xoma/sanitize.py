#    xoma/sanitize.py - scalar value handling for Xoma.
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
r"""Scalar values: which python types are written as plain text, how they are turned
into text and back, and the per-property constraints applied just before a value is
written out."""
from decimal import Decimal
from enum import Enum

from xoma.errors import InvalidSanitizerConfig, InvalidValue

__all__ = [ 'sanitize', 'is_scalar', 'to_text', 'from_text', 'primitive_of', 'primitives' ]

def _bool ( text ) :
    text = text.strip().lower()
    if text in ( 'true', '1' ) :
        return True
    if text in ( 'false', '0' ) :
        return False
    raise ValueError( "not a boolean: %r" % text )

# python type -> callable building a value of that type from element/attribute text.
primitives = { str : str, int : int, float : float, bool : _bool, Decimal : Decimal }

def primitive_of ( kind ) :
    r"""The primitive type ``kind`` is, or derives from (``str`` and ``int`` enums),
    else ``None``."""
    if kind in primitives :
        return kind
    if isinstance( kind, type ) :
        for base in primitives :
            if issubclass( kind, base ) :
                return base
    return None

def is_scalar ( value ) :
    return isinstance( value, tuple( primitives ) )

def to_text ( value ) :
    if isinstance( value, Enum ) :
        value = value.value
    if isinstance( value, bool ) :
        return "true" if value else "false"
    return str( value )

def from_text ( text, kind = None, field = None ) :
    r"""Convert node text ``text`` into ``kind`` when it is (or derives from) one of the
    known primitive types.  Anything else gets the raw text.  Empty text means ``None``
    for every primitive but ``str``."""
    text = text or ""
    base = primitive_of( kind )
    if base is None :
        return text
    if base is not str and not text.strip() :
        return None
    try :
        value = primitives[base]( text )
        return value if kind is base else kind( value )
    except ( ValueError, ArithmeticError ) as ex :
        raise InvalidValue( "Cannot read %r as %s for '%s': %s" % ( text, kind.__name__, field, ex )
            , field = field, text = text, kind = kind.__name__ )

def sanitize ( value, meta ) :
    r"""Apply the constraints declared on the property ``meta`` to the scalar ``value``.
    Only ``max_length`` exists today: the value is cut down to at most that many
    characters."""
    max_length = meta.max_length
    if max_length is None :
        return value
    if isinstance( max_length, bool ) or not isinstance( max_length, int ) or max_length <= 0 :
        raise InvalidSanitizerConfig( "Incorrect maxLength value for '%s': %r" % ( meta.field_name, max_length )
            , field = meta.field_name, max_length = max_length )
    return value[:max_length]
