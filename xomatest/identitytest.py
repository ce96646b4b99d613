import unittest
import xml.etree.ElementTree as ET

from xoma import ClassIdentityPolicy, MappingConfig, resolve_type, ClassNotFound, MissingTypeAttribute
from xoma.identity import qualify
from xomatest import Human, Person, Address, Circle, Outer

def policy ( **options ) :
    return ClassIdentityPolicy( MappingConfig( **options ) )

class ResolveTypeTests ( unittest.TestCase ) :
    def testDotted ( self ) :
        self.assertIs( resolve_type( "xomatest.Person" ), Person )

    def testNested ( self ) :
        self.assertIs( resolve_type( "xomatest.Outer.Inner" ), Outer.Inner )

    def testScoped ( self ) :
        """genosha-style module/scope.name paths"""
        self.assertIs( resolve_type( "xomatest/Outer.Inner" ), Outer.Inner )
        self.assertIs( resolve_type( "xml.etree.ElementTree/ElementTree" ), ET.ElementTree )

    def testClassPassesThrough ( self ) :
        self.assertIs( resolve_type( Address ), Address )

    def testNotFound ( self ) :
        for name in ( "xomatest.Nobody", "nosuchmodule.Thing", "Person", "", "xomatest/Nobody" ) :
            self.assertRaises( ClassNotFound, resolve_type, name )

    def testNotAClass ( self ) :
        self.assertRaises( ClassNotFound, resolve_type, "xomatest.DefaultTestCase._perform" )
        self.assertRaises( ClassNotFound, resolve_type, "xomatest.NIL" )

    def testQualify ( self ) :
        self.assertEqual( qualify( "app.model", "Person" ), "app.model.Person" )
        self.assertEqual( qualify( "", "app.Person" ), "app.Person" )

class PolicyTests ( unittest.TestCase ) :
    def testTagName ( self ) :
        element = ET.fromstring( "<Person/>" )
        self.assertIs( policy( classesNamespace = "xomatest" ).resolve_class( element ), Person )

    def testTypeAttribute ( self ) :
        element = ET.fromstring( '<shape xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:type="Circle"/>' )
        p = policy( extractClassFrom = "typeAttribute", classesNamespace = "xomatest" )
        self.assertEqual( p.identity_key( element ), "Circle" )
        self.assertIs( p.resolve_class( element ), Circle )

    def testMissingTypeAttribute ( self ) :
        p = policy( extractClassFrom = "typeAttribute", classesNamespace = "xomatest" )
        self.assertRaises( MissingTypeAttribute, p.resolve_class, ET.fromstring( "<Circle/>" ) )

    def testOverride ( self ) :
        element = ET.fromstring( "<person><name>Ann</name></person>" )
        p = policy( mapperClasses = { "person" : "xomatest.Human" } )
        self.assertIs( p.resolve_class( element ), Human )

    def testOverrideBeatsHint ( self ) :
        element = ET.fromstring( "<person/>" )
        p = policy( mapperClasses = { "person" : Human }, classesNamespace = "xomatest" )
        self.assertEqual( p.choose( "person", Address ), ( "override", Human ) )
        self.assertIs( p.resolve_class( element, Address ), Human )

    def testHintBeatsNamespace ( self ) :
        element = ET.fromstring( "<Person/>" )
        p = policy( classesNamespace = "xomatest" )
        self.assertIs( p.resolve_class( element, Address ), Address )

    def testNamespaceFallback ( self ) :
        p = policy( classesNamespace = "xomatest" )
        self.assertEqual( p.choose( "Circle" ), ( "namespace", "xomatest.Circle" ) )

    def testSelectReportsRule ( self ) :
        p = policy( mapperClasses = { "person" : Human }, classesNamespace = "xomatest" )
        self.assertEqual( p.select( ET.fromstring( "<person/>" ) ), ( "override", Human ) )
        self.assertEqual( p.select( ET.fromstring( "<Person/>" ) ), ( "namespace", Person ) )

    def testRuleOrder ( self ) :
        self.assertEqual( [ name for name, rule in policy().rules ], [ "override", "hint", "namespace" ] )

    def testCustomRules ( self ) :
        """The rule list is an ordinary list and can be rearranged"""
        p = policy( mapperClasses = { "Person" : Human }, classesNamespace = "xomatest" )
        p.rules = [ rule for rule in p.rules if rule[0] != "override" ]
        self.assertIs( p.resolve_class( ET.fromstring( "<Person/>" ) ), Person )

    def testClassNotFound ( self ) :
        p = policy( classesNamespace = "xomatest" )
        self.assertRaises( ClassNotFound, p.resolve_class, ET.fromstring( "<person/>" ) )
        self.assertRaises( ClassNotFound, policy().resolve_class, ET.fromstring( "<Person/>" ) )

    def testNamespaceSpellings ( self ) :
        self.assertEqual( MappingConfig( classesNamespace = "\\xomatest\\" ).classes_namespace, "xomatest" )
        self.assertIs( policy( classes_namespace = "xomatest." ).resolve_class( ET.fromstring( "<Address/>" ) ), Address )

if __name__ == "__main__" :
    unittest.main()
