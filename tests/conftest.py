"""
Orchestra Avro - Test Configuration

Shared fixtures: a small Orchestra repository with session and application
messages, the standard header and trailer, nested repeating groups, code sets
and AVRO_V1 datatype mappings.
"""

import pytest

from orchestra_avro.config import GeneratorConfig, TypeMappingStrategy
from orchestra_avro.index import EntityIndex
from orchestra_avro.repository import parse_repository


SAMPLE_ORCHESTRA_XML = """<?xml version="1.0" encoding="UTF-8"?>
<fixr:repository xmlns:fixr="http://fixprotocol.io/2020/orchestra/repository"
                 name="FIX.5.0SP2" version="FIX.5.0SP2_EP254">
  <fixr:datatypes>
    <fixr:datatype name="int"/>
    <fixr:datatype name="float"/>
    <fixr:datatype name="String"/>
    <fixr:datatype name="char"/>
    <fixr:datatype name="Length" baseType="int"/>
    <fixr:datatype name="NumInGroup" baseType="int"/>
    <fixr:datatype name="SeqNum" baseType="int"/>
    <fixr:datatype name="Qty" baseType="float"/>
    <fixr:datatype name="UTCTimestamp" baseType="String"/>
    <fixr:datatype name="Price" baseType="float">
      <fixr:mappedDatatype standard="XML" base="xs:decimal"/>
      <fixr:mappedDatatype standard="AVRO_V1" base="double"/>
    </fixr:datatype>
    <fixr:datatype name="Boolean" baseType="char">
      <fixr:mappedDatatype standard="AVRO_V1" base="boolean"/>
    </fixr:datatype>
    <fixr:datatype name="Percentage" baseType="float">
      <fixr:mappedDatatype standard="AVRO_V1" base="bytes">
        <fixr:extension>
          <logicalType name="decimal">
            <keyValue key="scale" value="2"/>
            <keyValue key="precision" value="4"/>
          </logicalType>
        </fixr:extension>
      </fixr:mappedDatatype>
    </fixr:datatype>
    <fixr:datatype name="UTCDateOnly" baseType="String">
      <fixr:mappedDatatype standard="AVRO_V1" base="int">
        <fixr:extension>
          <logicalType name="date"/>
        </fixr:extension>
      </fixr:mappedDatatype>
    </fixr:datatype>
  </fixr:datatypes>
  <fixr:codeSets>
    <fixr:codeSet name="SideCodeSet" id="54" type="char">
      <fixr:code name="Buy" id="54001" value="1"/>
      <fixr:code name="Sell" id="54002" value="2"/>
      <fixr:annotation>
        <fixr:documentation>Side of order</fixr:documentation>
      </fixr:annotation>
    </fixr:codeSet>
    <fixr:codeSet name="MsgTypeCodeSet" id="35" type="String">
      <fixr:code name="Heartbeat" id="35001" value="0"/>
      <fixr:code name="Logon" id="35002" value="A"/>
      <fixr:code name="NewOrderSingle" id="35003" value="D"/>
    </fixr:codeSet>
  </fixr:codeSets>
  <fixr:fields>
    <fixr:field id="8" name="BeginString" type="String"/>
    <fixr:field id="9" name="BodyLength" type="Length"/>
    <fixr:field id="10" name="CheckSum" type="String"/>
    <fixr:field id="11" name="ClOrdID" type="String">
      <fixr:annotation>
        <fixr:documentation>Unique identifier for Order
          as assigned by the buy-side.</fixr:documentation>
      </fixr:annotation>
    </fixr:field>
    <fixr:field id="34" name="MsgSeqNum" type="SeqNum"/>
    <fixr:field id="35" name="MsgType" type="MsgTypeCodeSet"/>
    <fixr:field id="38" name="OrderQty" type="Qty"/>
    <fixr:field id="44" name="Price" type="Price"/>
    <fixr:field id="54" name="Side" type="SideCodeSet"/>
    <fixr:field id="55" name="Symbol" type="String"/>
    <fixr:field id="58" name="Text" type="String"/>
    <fixr:field id="60" name="TransactTime" type="UTCTimestamp"/>
    <fixr:field id="108" name="HeartBtInt" type="int"/>
    <fixr:field id="448" name="PartyID" type="String"/>
    <fixr:field id="453" name="NoPartyIDs" type="NumInGroup"/>
    <fixr:field id="523" name="PartySubID" type="String"/>
    <fixr:field id="627" name="NoHops" type="NumInGroup"/>
    <fixr:field id="628" name="HopCompID" type="String"/>
    <fixr:field id="802" name="NoPartySubIDs" type="NumInGroup"/>
    <fixr:field id="1000" name="DiscountPct" type="Percentage"/>
    <fixr:field id="1001" name="SettleDate" type="UTCDateOnly"/>
  </fixr:fields>
  <fixr:components>
    <fixr:component id="1024" name="StandardHeader">
      <fixr:fieldRef id="8" presence="required"/>
      <fixr:fieldRef id="9" presence="required"/>
      <fixr:fieldRef id="35" presence="required"/>
      <fixr:fieldRef id="34" presence="required"/>
      <fixr:groupRef id="2085"/>
    </fixr:component>
    <fixr:component id="1025" name="StandardTrailer">
      <fixr:fieldRef id="10" presence="required"/>
    </fixr:component>
    <fixr:component id="1003" name="Instrument">
      <fixr:fieldRef id="55" presence="required"/>
      <fixr:fieldRef id="1000"/>
      <fixr:fieldRef id="1001"/>
      <fixr:annotation>
        <fixr:documentation>Security identification</fixr:documentation>
      </fixr:annotation>
    </fixr:component>
    <fixr:component id="1012" name="Parties">
      <fixr:groupRef id="2001">
        <fixr:annotation>
          <fixr:documentation>Parties to the order</fixr:documentation>
        </fixr:annotation>
      </fixr:groupRef>
    </fixr:component>
  </fixr:components>
  <fixr:groups>
    <fixr:group id="2085" name="HopGrp">
      <fixr:numInGroup id="627"/>
      <fixr:fieldRef id="628"/>
    </fixr:group>
    <fixr:group id="2001" name="PartyIDGrp">
      <fixr:numInGroup id="453"/>
      <fixr:fieldRef id="448" presence="required"/>
      <fixr:groupRef id="2002"/>
      <fixr:annotation>
        <fixr:documentation>Repeating party identifiers</fixr:documentation>
      </fixr:annotation>
    </fixr:group>
    <fixr:group id="2002" name="PartySubIDGrp">
      <fixr:numInGroup id="802"/>
      <fixr:fieldRef id="523"/>
    </fixr:group>
  </fixr:groups>
  <fixr:messages>
    <fixr:message name="Heartbeat" msgType="0" category="Session">
      <fixr:structure>
        <fixr:componentRef id="1024" presence="required"/>
        <fixr:fieldRef id="58"/>
        <fixr:componentRef id="1025" presence="required"/>
      </fixr:structure>
    </fixr:message>
    <fixr:message name="Logon" msgType="A" category="Session">
      <fixr:structure>
        <fixr:componentRef id="1024" presence="required"/>
        <fixr:fieldRef id="108" presence="required"/>
        <fixr:componentRef id="1025" presence="required"/>
      </fixr:structure>
    </fixr:message>
    <fixr:message name="NewOrderSingle" msgType="D" category="SingleGeneralOrderHandling">
      <fixr:structure>
        <fixr:componentRef id="1024" presence="required"/>
        <fixr:fieldRef id="11" presence="required">
          <fixr:annotation>
            <fixr:documentation>Client order id</fixr:documentation>
          </fixr:annotation>
        </fixr:fieldRef>
        <fixr:componentRef id="1012"/>
        <fixr:componentRef id="1003" presence="required"/>
        <fixr:fieldRef id="54" presence="required"/>
        <fixr:fieldRef id="44"/>
        <fixr:fieldRef id="38" presence="required"/>
        <fixr:fieldRef id="60" presence="required"/>
        <fixr:fieldRef id="58"/>
        <fixr:componentRef id="1025" presence="required"/>
      </fixr:structure>
      <fixr:annotation>
        <fixr:documentation>The new order message type is used by institutions
          wishing to electronically submit securities and forex orders.</fixr:documentation>
      </fixr:annotation>
    </fixr:message>
  </fixr:messages>
  <fixr:sections>
    <fixr:section name="Session"/>
    <fixr:section name="Trade"/>
  </fixr:sections>
  <fixr:categories>
    <fixr:category name="Session" section="Session"/>
    <fixr:category name="SingleGeneralOrderHandling" section="Trade"/>
  </fixr:categories>
</fixr:repository>
"""

NAMESPACE = "io.fixprotocol"


@pytest.fixture
def sample_xml():
    """Raw Orchestra document."""
    return SAMPLE_ORCHESTRA_XML


@pytest.fixture
def repository():
    return parse_repository(SAMPLE_ORCHESTRA_XML)


@pytest.fixture
def index(repository):
    return EntityIndex.build(repository)


@pytest.fixture
def orchestra_file(tmp_path):
    """Sample document written to disk."""
    path = tmp_path / "orchestra.xml"
    path.write_text(SAMPLE_ORCHESTRA_XML, encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path, orchestra_file):
    return GeneratorConfig(
        orchestration_file=str(orchestra_file),
        namespace=NAMESPACE,
        output_directory=str(tmp_path / "generated"),
    )


@pytest.fixture
def static_config(config):
    return config.with_overrides(type_mapping=TypeMappingStrategy.STATIC)


@pytest.fixture
def namespace():
    """Base namespace with the repository version appended."""
    return f"{NAMESPACE}.fix50sp2"
