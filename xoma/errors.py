#    xoma/errors.py - exceptions raised by Xoma.
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
r"""Exceptions raised while mapping objects to and from XML.

Every error aborts the serialize/unserialize call in progress; nothing is retried
and no partially populated object is handed back to the caller.
"""

__all__ = [ 'XomaError', 'ClassNotFound', 'MissingTypeAttribute', 'UnknownNode', 'UnknownAttribute'
    , 'UnknownElement', 'MissingMutator', 'NonScalarAttribute', 'InvalidSanitizerConfig'
    , 'MalformedAnnotation', 'CycleDetected', 'MalformedXml', 'InvalidValue' ]

class XomaError ( Exception ) :
    r"""Base class of all xoma errors.  ``details`` holds whatever context was at hand
    when the error was raised (class names, node names, values)."""
    def __init__ ( self, message, **details ) :
        Exception.__init__( self, message )
        self.message = message
        self.details = details

    def __repr__ ( self ) :
        return "%s(%r)" % ( self.__class__.__name__, self.message )

class ClassNotFound ( XomaError, LookupError ) :
    r"""The identity of an element resolved to a name that is not a class."""

class MissingTypeAttribute ( XomaError ) :
    r"""Class identity is read from ``xsi:type`` but the element has none."""

class UnknownNode ( XomaError ) :
    pass

class UnknownAttribute ( UnknownNode ) :
    pass

class UnknownElement ( UnknownNode ) :
    pass

class MissingMutator ( XomaError ) :
    r"""A node matched a declared property but the class has no way to set it."""

class NonScalarAttribute ( XomaError, TypeError ) :
    pass

class InvalidSanitizerConfig ( XomaError, ValueError ) :
    pass

class MalformedAnnotation ( XomaError, ValueError ) :
    pass

class CycleDetected ( XomaError ) :
    pass

class MalformedXml ( XomaError, ValueError ) :
    pass

class InvalidValue ( XomaError, ValueError ) :
    r"""Node text cannot be converted to the type the property's setter expects."""
