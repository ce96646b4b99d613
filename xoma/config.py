#    xoma/config.py - mapping configuration for Xoma.
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
r"""Session configuration consulted on every class resolution.

Options may be given by their python names or by the camelCase names used in mapping
files (``extractClassFrom``, ``classesNamespace``, ``skipUnknownObjects``,
``mapperClasses``, ``skipWhenEmpty``).  Changing the configuration does not invalidate
metadata that is already cached: do not switch class resolution settings mid-session.
"""
import inspect

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [ 'MappingConfig', 'TAG_NAME', 'TYPE_ATTRIBUTE' ]

TAG_NAME = "tagName"
TYPE_ATTRIBUTE = "typeAttribute"

class MappingConfig ( BaseModel ) :
    model_config = ConfigDict( populate_by_name = True, extra = "forbid", frozen = True )

    extract_class_from : str = Field( default = TAG_NAME, alias = "extractClassFrom" )
    classes_namespace : str = Field( default = "", alias = "classesNamespace" )
    skip_unknown_objects : bool = Field( default = True, alias = "skipUnknownObjects" )
    mapper_classes : dict = Field( default_factory = dict, alias = "mapperClasses" )
    skip_when_empty : bool = Field( default = True, alias = "skipWhenEmpty" )

    @field_validator( "extract_class_from", mode = "before" )
    @classmethod
    def _check_source ( cls, value ) :
        if value not in ( TAG_NAME, TYPE_ATTRIBUTE ) :
            raise ValueError( "extractClassFrom must be '%s' or '%s'" % ( TAG_NAME, TYPE_ATTRIBUTE ) )
        return value

    @field_validator( "classes_namespace", mode = "before" )
    @classmethod
    def _normalize_namespace ( cls, value ) :
        # both "pkg.models" and the php-ish "\\pkg\\models\\" name the same module.
        return ( value or "" ).replace( "\\", "." ).strip( "." )

    @field_validator( "mapper_classes", mode = "before" )
    @classmethod
    def _check_mapper ( cls, value ) :
        value = dict( value or {} )
        for key, target in value.items() :
            if not isinstance( key, str ) or not ( isinstance( target, str ) or inspect.isclass( target ) ) :
                raise ValueError( "mapperClasses maps identity keys to class names or classes, got %r: %r" % ( key, target ) )
        return value

    def replace ( self, options ) :
        r"""Return a new configuration with the keys in ``options`` replaced."""
        update = MappingConfig.model_validate( dict( options ) )
        merged = dict( ( name, getattr( self, name ) ) for name in MappingConfig.model_fields )
        merged.update( ( name, getattr( update, name ) ) for name in update.model_fields_set )
        return MappingConfig( **merged )
