import unittest
from decimal import Decimal
from enum import IntEnum

from xoma import sanitize, InvalidSanitizerConfig, InvalidValue, PropertyMetadata
from xoma.sanitize import to_text, from_text, is_scalar
from xomatest import Colour

class Level ( IntEnum ) :
    LOW = 1
    HIGH = 3

def meta ( max_length = None ) :
    return PropertyMetadata( field_name = "title", xml_name = "title", max_length = max_length )

class SanitizeTests ( unittest.TestCase ) :
    def testTruncate ( self ) :
        self.assertEqual( sanitize( "HelloWorld", meta( 5 ) ), "Hello" )

    def testShortValueUntouched ( self ) :
        self.assertEqual( sanitize( "Hi", meta( 5 ) ), "Hi" )

    def testNoConstraint ( self ) :
        self.assertEqual( sanitize( "HelloWorld", meta() ), "HelloWorld" )

    def testCharactersNotBytes ( self ) :
        """Truncation counts characters, not encoded bytes"""
        self.assertEqual( sanitize( "été à Paris", meta( 4 ) ), "été " )

    def testInvalidMaxLength ( self ) :
        for bad in ( 0, -1, "5", 2.5 ) :
            self.assertRaises( InvalidSanitizerConfig, sanitize, "value", meta( bad ) )

class ScalarTests ( unittest.TestCase ) :
    def testToText ( self ) :
        self.assertEqual( to_text( True ), "true" )
        self.assertEqual( to_text( False ), "false" )
        self.assertEqual( to_text( 42 ), "42" )
        self.assertEqual( to_text( Decimal( "1.50" ) ), "1.50" )

    def testFromText ( self ) :
        self.assertEqual( from_text( "42", int ), 42 )
        self.assertEqual( from_text( "2.5", float ), 2.5 )
        self.assertIs( from_text( "true", bool ), True )
        self.assertIs( from_text( "false", bool ), False )
        self.assertEqual( from_text( "1.50", Decimal ), Decimal( "1.50" ) )
        self.assertEqual( from_text( None ), "" )
        self.assertEqual( from_text( "raw", object ), "raw" )

    def testIsScalar ( self ) :
        self.assertTrue( is_scalar( "x" ) )
        self.assertTrue( is_scalar( 1 ) )
        self.assertFalse( is_scalar( None ) )
        self.assertFalse( is_scalar( [ 1 ] ) )
        self.assertFalse( is_scalar( object() ) )

    def testEmptyText ( self ) :
        """empty text is None for every type but str"""
        for kind in ( int, float, bool, Decimal ) :
            self.assertIsNone( from_text( "", kind ) )
            self.assertIsNone( from_text( "  ", kind ) )
        self.assertEqual( from_text( "", str ), "" )

    def testInvalidText ( self ) :
        for text, kind in ( ( "abc", int ), ( "x1", float ), ( "maybe", bool ), ( "one", Decimal ) ) :
            with self.assertRaises( InvalidValue ) as caught :
                from_text( text, kind, "count" )
            self.assertEqual( caught.exception.details["field"], "count" )
            self.assertIsInstance( caught.exception, ValueError )

    def testEnums ( self ) :
        self.assertTrue( is_scalar( Colour.RED ) )
        self.assertTrue( is_scalar( Level.HIGH ) )
        self.assertEqual( to_text( Colour.RED ), "red" )
        self.assertEqual( to_text( Level.HIGH ), "3" )
        self.assertIs( from_text( "red", Colour ), Colour.RED )
        self.assertIs( from_text( "3", Level ), Level.HIGH )
        self.assertRaises( InvalidValue, from_text, "green", Colour )

if __name__ == "__main__" :
    unittest.main()
