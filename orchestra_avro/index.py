"""
Entity Index

Lookup maps over the entity lists of a repository. Duplicate keys overwrite
earlier entries.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .model import (
    Category,
    CodeSet,
    Component,
    Datatype,
    Field,
    Group,
    Message,
    Repository,
    Section,
)


@dataclass
class EntityIndex:
    fields: Dict[int, Field] = field(default_factory=dict)
    components: Dict[int, Component] = field(default_factory=dict)
    groups: Dict[int, Group] = field(default_factory=dict)
    code_sets: Dict[str, CodeSet] = field(default_factory=dict)
    datatypes: Dict[str, Datatype] = field(default_factory=dict)
    sections: Dict[str, Section] = field(default_factory=dict)
    categories: Dict[str, Category] = field(default_factory=dict)
    messages: List[Message] = field(default_factory=list)

    @classmethod
    def build(cls, repository: Repository) -> "EntityIndex":
        return cls(
            fields={f.id: f for f in repository.fields},
            components={c.id: c for c in repository.components},
            groups={g.id: g for g in repository.groups},
            code_sets={c.name: c for c in repository.code_sets},
            datatypes={d.name: d for d in repository.datatypes},
            sections={s.name: s for s in repository.sections},
            categories={c.name: c for c in repository.categories},
            messages=list(repository.messages),
        )

    def code_set_for(self, fld: Field) -> Optional[CodeSet]:
        """Code set enumerating ``fld``, if its datatype names one."""
        return self.code_sets.get(fld.type)

    def section_of(self, message: Message) -> Optional[Section]:
        category = self.categories.get(message.category)
        if category is None:
            return None
        return self.sections.get(category.section)
