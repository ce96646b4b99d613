import unittest
from typing import Optional

from xoma import xml, resolve, MalformedAnnotation, InvalidSanitizerConfig, ATTRIBUTE, ELEMENT
from xoma.annotations import summarize, PropertyMetadata
from xomatest import Address, Person, Note, Human, Basket, Circle, Shape, Extra

class ResolveTests ( unittest.TestCase ) :
    def testPropertyDefaults ( self ) :
        """An empty declaration opts the property in with every default"""
        meta = resolve( xml(), "street" )
        self.assertEqual( meta.field_name, "street" )
        self.assertEqual( meta.xml_name, "street" )
        self.assertEqual( meta.placement, ELEMENT )
        self.assertIsNone( meta.nil )
        self.assertIsNone( meta.max_length )
        self.assertFalse( meta.name_from_child )

    def testPropertyOptions ( self ) :
        meta = resolve( xml( { "as" : "attr", "name" : "ID", "nil" : True, "maxLength" : 3, "getter" : "ident" } ), "id" )
        self.assertEqual( meta.placement, ATTRIBUTE )
        self.assertTrue( meta.is_attribute )
        self.assertEqual( meta.xml_name, "ID" )
        self.assertTrue( meta.nil )
        self.assertEqual( meta.max_length, 3 )
        self.assertEqual( meta.getter, "ident" )

    def testSnakeCaseOptions ( self ) :
        meta = resolve( xml( as_ = "attr", max_length = 4, name_from = "child" ), "x" )
        self.assertTrue( meta.is_attribute )
        self.assertEqual( meta.max_length, 4 )
        self.assertTrue( meta.name_from_child )

    def testUndeclared ( self ) :
        """Plain values and undocumented properties are not mapped"""
        self.assertIsNone( resolve( 42, "answer" ) )
        self.assertIsNone( resolve( vars( Note )['words'], "words" ) )
        self.assertIsNone( resolve( Address ) )

    def testClassDecorator ( self ) :
        options = resolve( Basket )
        self.assertEqual( options.default_setter, "add_item" )
        self.assertIsNone( options.name )
        self.assertEqual( resolve( Human ).name, "human" )

    def testBareClassDecorator ( self ) :
        @xml
        class Plain ( object ) :
            pass
        options = resolve( Plain )
        self.assertIsNotNone( options )
        self.assertIsNone( options.name )

    def testClassDeclarationNotInherited ( self ) :
        class Bigger ( Basket ) :
            pass
        self.assertIsNone( resolve( Bigger ) )

    def testDocstringMarkers ( self ) :
        options = resolve( Note )
        self.assertEqual( options.name, "memo" )
        self.assertFalse( options.skip_when_empty )
        subject = resolve( vars( Note )['subject'], "subject" )
        self.assertEqual( subject.xml_name, "about" )
        self.assertTrue( subject.is_attribute )
        self.assertEqual( resolve( vars( Note )['body'], "body" ).placement, ELEMENT )

    def testDocstringWithoutBraces ( self ) :
        class Loose ( object ) :
            """@xml("name": "loose")"""
        self.assertEqual( resolve( Loose ).name, "loose" )

    def testMalformedPayload ( self ) :
        class Broken ( object ) :
            """@xml({name: loose)"""
        self.assertRaises( MalformedAnnotation, resolve, Broken )

    def testNonObjectPayload ( self ) :
        class Listed ( object ) :
            """@xml([1, 2])"""
        self.assertRaises( MalformedAnnotation, resolve, Listed )

    def testUnknownOption ( self ) :
        self.assertRaises( MalformedAnnotation, resolve, xml( colour = "red" ), "x" )
        self.assertRaises( MalformedAnnotation, resolve, xml( defaultSetter = "add" ), "x" )

    def testBadValues ( self ) :
        self.assertRaises( MalformedAnnotation, resolve, xml( { "as" : "text" } ), "x" )
        self.assertRaises( MalformedAnnotation, resolve, xml( nameFrom = "parent" ), "x" )
        self.assertRaises( MalformedAnnotation, resolve, xml( nil = "yes" ), "x" )
        self.assertRaises( MalformedAnnotation, resolve, xml( maxLength = "5" ), "x" )
        self.assertRaises( MalformedAnnotation, resolve, xml( maxLength = True ), "x" )
        self.assertRaises( MalformedAnnotation, resolve, xml( type = 5 ), "x" )

    def testNonPositiveMaxLength ( self ) :
        self.assertRaises( InvalidSanitizerConfig, resolve, xml( maxLength = 0 ), "x" )
        self.assertRaises( InvalidSanitizerConfig, resolve, xml( maxLength = -2 ), "x" )

    def testBadCall ( self ) :
        self.assertRaises( MalformedAnnotation, xml, "attr" )
        self.assertRaises( MalformedAnnotation, xml, {}, {} )
        self.assertRaises( MalformedAnnotation, xml(), 42 )

    def testDeclarationHiddenFromInstances ( self ) :
        """A declared but unset property reads as missing, not as its declaration"""
        self.assertFalse( hasattr( Person(), "name" ) )

class SummaryTests ( unittest.TestCase ) :
    def testDeclarationOrder ( self ) :
        summary = summarize( Person )
        self.assertEqual( [ m.field_name for m in summary.properties ], [ "id", "name", "nickname", "address" ] )
        self.assertEqual( summary.name, "Person" )
        self.assertIs( summary.klass, Person )

    def testPartition ( self ) :
        summary = summarize( Person )
        self.assertEqual( [ m.field_name for m in summary.attributes() ], [ "id" ] )
        self.assertEqual( [ m.field_name for m in summary.elements() ], [ "name", "nickname", "address" ] )
        self.assertEqual( sorted( summary.element_index() ), [ "address", "name", "nickname" ] )
        self.assertEqual( list( summary.attribute_index() ), [ "id" ] )

    def testClassNameOption ( self ) :
        self.assertEqual( summarize( Human ).name, "human" )
        self.assertEqual( summarize( Note ).name, "memo" )

    def testInheritedFirst ( self ) :
        summary = summarize( Circle )
        self.assertEqual( [ m.field_name for m in summary.properties ], [ "label", "radius" ] )

    def testSubclassUndeclares ( self ) :
        class Unlabelled ( Shape ) :
            label = None
        self.assertEqual( summarize( Unlabelled ).properties, () )

    def testCollisionFirstWins ( self ) :
        class Twins ( object ) :
            first = xml( name = "same" )
            second = xml( name = "same" )
        index = summarize( Twins ).element_index()
        self.assertEqual( index["same"].field_name, "first" )

    def testAccessorBinding ( self ) :
        summary = summarize( Person )
        person = Person( id = 3, name = "Ann" )
        by_name = dict( ( m.field_name, m ) for m in summary.properties )
        self.assertEqual( by_name["name"].reader( person ), "Ann" )
        by_name["name"].writer( person, "Bob" )
        self.assertEqual( person.get_name(), "Bob" )

    def testSetterHints ( self ) :
        by_name = dict( ( m.field_name, m ) for m in summarize( Person ).properties )
        self.assertIs( by_name["id"].value_type, int )
        self.assertIs( by_name["address"].value_type, Address )
        self.assertIsNone( by_name["name"].value_type )

    def testOptionalHint ( self ) :
        class Holder ( object ) :
            address = xml()
            def set_address ( self, address : Optional[Address] ) :
                self.address_value = address
        self.assertIs( summarize( Holder ).properties[0].value_type, Address )

    def testExplicitType ( self ) :
        self.assertIs( summarize( Extra ).properties[0].value_type, int )
        class Named ( object ) :
            where = xml( type = "xomatest.Address" )
        self.assertIs( summarize( Named ).properties[0].value_type, Address )

    def testPropertyAccessors ( self ) :
        by_name = dict( ( m.field_name, m ) for m in summarize( Note ).properties )
        note = Note( subject = "s" )
        self.assertEqual( by_name["subject"].reader( note ), "s" )
        by_name["body"].writer( note, "text" )
        self.assertEqual( note.body, "text" )
        self.assertNotIn( "words", by_name )

    def testMissingConventionalAccessors ( self ) :
        class Bare ( object ) :
            thing = xml()
        meta = summarize( Bare ).properties[0]
        self.assertIsNone( meta.reader )
        self.assertIsNone( meta.writer )

    def testExplicitAccessorMissing ( self ) :
        class Wrong ( object ) :
            thing = xml( getter = "fetch_thing" )
        self.assertRaises( MalformedAnnotation, summarize, Wrong )

    def testExplicitAccessors ( self ) :
        class Custom ( object ) :
            thing = xml( getter = "fetch", setter = "store" )
            def fetch ( self ) :
                return "got"
            def store ( self, value ) :
                self.stored = value
        meta = summarize( Custom ).properties[0]
        obj = Custom()
        self.assertEqual( meta.reader( obj ), "got" )
        meta.writer( obj, "x" )
        self.assertEqual( obj.stored, "x" )

    def testClassValuedAttributesIgnored ( self ) :
        """a declared class held as an attribute is not read as a property"""
        class Holding ( object ) :
            kind = Human
            label = xml()
            @xml( name = "part" )
            class Part ( object ) :
                pass
        self.assertEqual( [ m.field_name for m in summarize( Holding ).properties ], [ "label" ] )

    def testImmutable ( self ) :
        summary = summarize( Person )
        self.assertRaises( AttributeError, setattr, summary, "name", "Other" )
        self.assertRaises( AttributeError, setattr, summary.properties[0], "xml_name", "other" )
        self.assertIsInstance( summary.properties[0], PropertyMetadata )

if __name__ == "__main__" :
    unittest.main()
