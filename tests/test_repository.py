"""
Orchestra Avro - Repository Reader Tests
"""

import pytest

from orchestra_avro.exceptions import RepositoryLoadException
from orchestra_avro.model import MemberKind, Presence
from orchestra_avro.repository import clean_text, load_repository, local_name, parse_repository


def _by_name(entities, name):
    return next(e for e in entities if e.name == name)


class TestHelpers:
    def test_local_name(self):
        assert local_name("{http://fixprotocol.io/2020/orchestra/repository}field") == "field"
        assert local_name("field") == "field"

    def test_clean_text(self):
        assert clean_text("  a\n   b\tc ") == "a b c"
        assert clean_text(None) == ""


class TestRepositoryReader:
    """Test conversion of an Orchestra document into the model."""

    def test_header_attributes(self, repository):
        assert repository.name == "FIX.5.0SP2"
        assert repository.version == "FIX.5.0SP2_EP254"

    def test_entity_counts(self, repository):
        assert repository.summary() == {
            "datatypes": 13,
            "code_sets": 2,
            "fields": 21,
            "components": 4,
            "groups": 3,
            "messages": 3,
        }
        assert len(repository.sections) == 2
        assert len(repository.categories) == 2

    def test_field_documentation_is_collapsed(self, repository):
        cl_ord_id = _by_name(repository.fields, "ClOrdID")
        assert cl_ord_id.id == 11
        assert cl_ord_id.type == "String"
        assert cl_ord_id.documentation == ("Unique identifier for Order as assigned by the buy-side.",)

    def test_code_set(self, repository):
        side = _by_name(repository.code_sets, "SideCodeSet")
        assert side.id == 54
        assert side.type == "char"
        assert [(c.name, c.value) for c in side.codes] == [("Buy", "1"), ("Sell", "2")]
        assert side.documentation == ("Side of order",)

    def test_datatype_mappings(self, repository):
        price = _by_name(repository.datatypes, "Price")
        assert price.base_type == "float"
        assert price.mapping_for("AVRO_V1").base == "double"
        assert price.mapping_for("XML").base == "xs:decimal"
        assert price.mapping_for("JSON") is None

    def test_logical_type(self, repository):
        percentage = _by_name(repository.datatypes, "Percentage")
        logical = percentage.mapping_for("AVRO_V1").logical_type
        assert logical.name == "decimal"
        assert logical.key_values == (("scale", "2"), ("precision", "4"))

    def test_group(self, repository):
        group = _by_name(repository.groups, "PartyIDGrp")
        assert group.id == 2001
        assert group.num_in_group_id == 453
        assert [(m.kind, m.target_id) for m in group.members] == [
            (MemberKind.FIELD, 448),
            (MemberKind.GROUP, 2002),
        ]

    def test_message_structure(self, repository):
        message = _by_name(repository.messages, "NewOrderSingle")
        assert message.category == "SingleGeneralOrderHandling"
        assert message.msg_type == "D"
        assert not message.is_session
        assert message.members[0].kind is MemberKind.COMPONENT
        assert message.members[0].target_id == 1024
        assert message.members[1].presence is Presence.REQUIRED
        assert message.members[1].documentation == ("Client order id",)
        assert message.members[2].presence is Presence.OPTIONAL

    def test_session_category(self, repository):
        assert _by_name(repository.messages, "Heartbeat").is_session

    def test_presence_variants(self):
        repository = parse_repository(
            """<repository name="r" version="v">
                 <components>
                   <component id="1" name="C">
                     <fieldRef id="1" presence="constant"/>
                     <fieldRef id="2" presence="forbidden"/>
                     <fieldRef id="3" presence="REQUIRED"/>
                     <fieldRef id="4"/>
                   </component>
                 </components>
               </repository>"""
        )
        members = repository.components[0].members
        assert [m.target_id for m in members] == [1, 3, 4]
        assert [m.presence for m in members] == [Presence.REQUIRED, Presence.REQUIRED, Presence.OPTIONAL]

    def test_key_value_child_elements(self):
        repository = parse_repository(
            """<repository>
                 <datatypes>
                   <datatype name="Amt">
                     <mappedDatatype standard="AVRO_V1" base="bytes">
                       <extension>
                         <logicalType name="decimal">
                           <keyValue><key>scale</key><value>4</value></keyValue>
                         </logicalType>
                       </extension>
                     </mappedDatatype>
                   </datatype>
                 </datatypes>
               </repository>"""
        )
        logical = repository.datatypes[0].mapping_for("AVRO_V1").logical_type
        assert logical.key_values == (("scale", "4"),)

    def test_parse_bytes(self, sample_xml):
        repository = parse_repository(sample_xml.encode("utf-8"))
        assert len(repository.messages) == 3

    def test_missing_sections_are_empty(self):
        repository = parse_repository("<repository/>")
        assert repository.fields == []
        assert repository.messages == []


class TestRepositoryReaderErrors:
    """Test failures while loading a document."""

    def test_malformed_xml(self):
        with pytest.raises(RepositoryLoadException) as exc_info:
            parse_repository("<repository><fields>")
        assert exc_info.value.error_code == "REPOSITORY_LOAD_ERROR"

    def test_wrong_root_element(self):
        with pytest.raises(RepositoryLoadException, match="Expected <repository>"):
            parse_repository("<catalog/>")

    def test_invalid_field_id(self):
        with pytest.raises(RepositoryLoadException, match="invalid id") as exc_info:
            parse_repository('<repository><fields><field id="x" name="A" type="int"/></fields></repository>')
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_group_without_num_in_group(self):
        with pytest.raises(RepositoryLoadException, match="no numInGroup"):
            parse_repository('<repository><groups><group id="1" name="G"/></groups></repository>')

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(RepositoryLoadException) as exc_info:
            load_repository(tmp_path / "absent.xml")
        assert exc_info.value.context["path"].endswith("absent.xml")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_load_from_disk(self, orchestra_file):
        repository = load_repository(orchestra_file)
        assert repository.version == "FIX.5.0SP2_EP254"
        assert len(repository.fields) == 21
