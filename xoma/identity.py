#    xoma/identity.py - deciding which class an XML element becomes.
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
r"""Class identity resolution.

The *identity key* of an element is its tag name or its ``xsi:type`` attribute, as
configured.  The class is then chosen by the first rule of :attr:`ClassIdentityPolicy.rules`
that answers:

    1. ``override``  - the key is listed in ``mapper_classes``;
    2. ``hint``      - the parent property declared the class of its values;
    3. ``namespace`` - ``classes_namespace`` + "." + key.

Names are looked up by :func:`resolve_type`; a name that is not a class is an error.
"""
import importlib, inspect, logging

from xoma.config import TYPE_ATTRIBUTE
from xoma.errors import ClassNotFound, MissingTypeAttribute

__all__ = [ 'ClassIdentityPolicy', 'resolve_type', 'qualify', 'XSI', 'XSI_TYPE', 'XSI_NIL' ]

logger = logging.getLogger( __name__ )

XSI = "http://www.w3.org/2001/XMLSchema-instance"
XSI_TYPE = "{%s}type" % XSI
XSI_NIL = "{%s}nil" % XSI

def _lookup ( modname, path ) :
    scope = importlib.import_module( modname )
    for name in path :
        scope = getattr( scope, name )
    return scope

def resolve_type ( name ) :
    r"""Find the class called ``name``.  ``name`` is either ``module/Scope.Name`` or a
    plain dotted path, in which case the longest importable module prefix is used."""
    if inspect.isclass( name ) :
        return name
    if not name :
        raise ClassNotFound( "Class '' not found", name = name )
    if '/' in name :
        modname, _, kind = name.partition( '/' )
        candidates = [ ( modname, [ part for part in kind.split( '.' ) if part ] ) ]
    else :
        parts = name.split( '.' )
        candidates = [ ( ".".join( parts[:i] ), parts[i:] ) for i in range( len( parts ) - 1, 0, -1 ) ]
    for modname, path in candidates :
        try :
            found = _lookup( modname, path )
        except ( ImportError, AttributeError ) :
            continue
        if inspect.isclass( found ) :
            return found
        break
    raise ClassNotFound( "Class '%s' not found" % name, name = name )

def qualify ( namespace, key ) :
    return "%s.%s" % ( namespace, key ) if namespace else key

class ClassIdentityPolicy ( object ) :
    r"""Ordered class resolution rules for one mapping configuration.  Each rule takes the
    identity key and the hint and returns a class, a class name, or ``None`` to pass."""
    def __init__ ( self, config ) :
        self.config = config
        self.rules = [ ( 'override', self.override ), ( 'hint', self.hint ), ( 'namespace', self.namespace ) ]

    def identity_key ( self, element ) :
        if self.config.extract_class_from == TYPE_ATTRIBUTE :
            key = element.get( XSI_TYPE )
            if key is None :
                raise MissingTypeAttribute( "Element %s has no %s attribute" % ( element.tag, XSI_TYPE ), tag = element.tag )
            return key
        return element.tag

    def override ( self, key, hint ) :
        return self.config.mapper_classes.get( key )

    def hint ( self, key, hint ) :
        return hint

    def namespace ( self, key, hint ) :
        return qualify( self.config.classes_namespace, key )

    def choose ( self, key, hint = None ) :
        r"""Apply the rules in order; returns ``( rule name, class or class name )``."""
        for name, rule in self.rules :
            target = rule( key, hint )
            if target is not None :
                return name, target
        raise ClassNotFound( "No class for identity key '%s'" % key, key = key )

    def select ( self, element, hint = None ) :
        r"""Resolve the class of ``element``; returns ``( rule name, class )``."""
        key = self.identity_key( element )
        rule, target = self.choose( key, hint )
        klass = resolve_type( target )
        logger.debug( "<%s> resolved to %s by %s rule", element.tag, klass.__qualname__, rule )
        return rule, klass

    def resolve_class ( self, element, hint = None ) :
        return self.select( element, hint )[1]
