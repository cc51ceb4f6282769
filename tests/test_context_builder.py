"""Tests for the context_builder module."""

from crudify import sql
from crudify.context_builder import build_context
from crudify.schema_parser import build_entities


class TestBuildContext:
    """Test the template context for the three-entity schema."""

    @classmethod
    def setup_class(cls):
        from conftest import ORDER_SCHEMA

        cls.entities = build_entities(ORDER_SCHEMA)
        cls.ctx = build_context(cls.entities)
        cls.by_name = {e["name"]: e for e in cls.ctx["entities"]}

    def test_entity_count(self):
        assert self.ctx["entity_count"] == 3

    def test_entities_in_schema_order(self):
        assert [e["name"] for e in self.ctx["entities"]] == ["Order", "Customer", "Marker"]

    def test_field_types(self):
        fields = self.by_name["Order"]["fields"]
        assert [(f["name"], f["type"]) for f in fields] == [
            ("id", "int"),
            ("name", "str"),
            ("total", "float"),
            ("paid", "bool"),
            ("placed_at", "datetime.datetime"),
        ]

    def test_row_extraction_uses_field_positions(self):
        assert self.by_name["Customer"]["row_kwargs"] == "email=row[0], id=row[1]"

    def test_bind_args_follow_placeholders(self):
        """Binding slot k must feed placeholder $k+1 of the same statement."""
        customer = self.entities[1]
        ctx = self.by_name["Customer"]
        assert ctx["bind_args"] == ["body.email", "body.id"]
        insert = sql.insert(customer)
        columns = insert[insert.index("(") + 1:insert.index(")")].split(", ")
        for index, arg in enumerate(ctx["bind_args"]):
            column = arg.split(".", 1)[1]
            assert columns[index] == column
            assert customer.field(column).placeholder == f"${index + 1}"

    def test_update_binds_identifier_last(self):
        ctx = self.by_name["Customer"]
        assert ctx["update_args"] == ["body.email", "body.id", "id"]
        assert ctx["sql"]["update"].endswith("WHERE id = $3")

    def test_id_type_from_property(self):
        assert self.by_name["Order"]["id_type"] == "int"

    def test_id_type_default(self):
        assert self.by_name["Marker"]["id_type"] == "str"

    def test_empty_entity_has_no_update(self):
        marker = self.by_name["Marker"]
        assert marker["has_update"] is False
        assert "update" not in marker["handlers"]
        assert marker["update_args"] == []
        assert marker["row_kwargs"] == ""

    def test_routes(self):
        routes = [(r["method"], r["path"], r["handler"]) for r in self.ctx["routes"]]
        assert routes[:4] == [
            ("GET", "/api/order", "list_order"),
            ("POST", "/api/order", "create_order"),
            ("PUT", "/api/order/{id}", "update_order"),
            ("DELETE", "/api/order/{id}", "delete_order"),
        ]
        assert ("PUT", "/api/marker/{id}", "update_marker") not in routes
        assert self.ctx["route_count"] == 11

    def test_create_tables_in_entity_order(self):
        assert self.ctx["create_tables"] == [sql.create_table(e) for e in self.entities]

    def test_custom_schema(self):
        ctx = build_context(self.entities, schema="shop")
        assert ctx["entities"][0]["sql"]["list"].endswith("FROM shop.order")


class TestAliasedFields:
    """Columns pydantic cannot hold verbatim are bound through a safe attribute."""

    @classmethod
    def setup_class(cls):
        entities = build_entities({
            "Doc": {
                "properties": {
                    "_id": {"type": "string"},
                    "title": {"type": "string"},
                    "from": {"type": "integer"},
                },
            },
        })
        cls.ctx = build_context(entities)["entities"][0]

    def test_fields_carry_alias(self):
        assert [(f["name"], f["attr"], f["alias"]) for f in self.ctx["fields"]] == [
            ("_id", "id", "_id"),
            ("title", "title", None),
            ("from", "from_", "from"),
        ]

    def test_sql_keeps_column_names(self):
        assert self.ctx["sql"]["list"] == "SELECT _id, title, from FROM public.doc"

    def test_extraction_and_binding_use_attributes(self):
        assert self.ctx["row_kwargs"] == "id=row[0], title=row[1], from_=row[2]"
        assert self.ctx["bind_args"] == ["body.id", "body.title", "body.from_"]
