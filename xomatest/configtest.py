import unittest

from pydantic import ValidationError

from xoma import MappingConfig, Serializer, TAG_NAME, TYPE_ATTRIBUTE, XomaError, ClassNotFound
from xomatest import Human, Person

class MappingConfigTests ( unittest.TestCase ) :
    def testDefaults ( self ) :
        config = MappingConfig()
        self.assertEqual( config.extract_class_from, TAG_NAME )
        self.assertEqual( config.classes_namespace, "" )
        self.assertTrue( config.skip_unknown_objects )
        self.assertEqual( config.mapper_classes, {} )
        self.assertTrue( config.skip_when_empty )

    def testAliases ( self ) :
        config = MappingConfig( extractClassFrom = "typeAttribute", skipUnknownObjects = False, mapperClasses = { "p" : Human } )
        self.assertEqual( config.extract_class_from, TYPE_ATTRIBUTE )
        self.assertFalse( config.skip_unknown_objects )
        self.assertIs( config.mapper_classes["p"], Human )

    def testRejected ( self ) :
        self.assertRaises( ValidationError, MappingConfig, extractClassFrom = "attribute" )
        self.assertRaises( ValidationError, MappingConfig, mapperClasses = { "p" : 42 } )
        self.assertRaises( ValidationError, MappingConfig, unknownOption = True )

    def testReplaceKeepsOthers ( self ) :
        config = MappingConfig( classesNamespace = "xomatest", skipUnknownObjects = False )
        replaced = config.replace( { "mapperClasses" : { "person" : "xomatest.Human" } } )
        self.assertEqual( replaced.classes_namespace, "xomatest" )
        self.assertFalse( replaced.skip_unknown_objects )
        self.assertEqual( replaced.mapper_classes, { "person" : "xomatest.Human" } )
        self.assertEqual( config.mapper_classes, {} )

class SerializerConfigTests ( unittest.TestCase ) :
    def testConfigMethod ( self ) :
        s = Serializer()
        self.assertRaises( ClassNotFound, s.unserialize, "<Person/>" )
        s.config( { "classesNamespace" : "xomatest" } )
        self.assertIsInstance( s.unserialize( "<Person/>" ), Person )
        s.config( mapperClasses = { "Person" : Human } )
        self.assertIsInstance( s.unserialize( "<Person/>" ), Human )

    def testConfigKeepsCache ( self ) :
        s = Serializer( classesNamespace = "xomatest" )
        summary = s.get_summary( Person )
        s.config( skipUnknownObjects = False )
        self.assertIs( s.get_summary( Person ), summary )

    def testErrorsShareBase ( self ) :
        try :
            Serializer().unserialize( "<Person/>" )
        except XomaError as ex :
            self.assertEqual( ex.details["name"], "Person" )
            self.assertIn( "Person", ex.message )
        else :
            self.fail( "ClassNotFound not raised" )

if __name__ == "__main__" :
    unittest.main()
