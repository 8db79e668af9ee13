from marshmallow import Schema, fields, INCLUDE, validates_schema, ValidationError


class DocumentInSchema(Schema):
    """
    Pass-through schema for schema-free documents: every top-level field is
    kept verbatim. Only the store-owned `_id` is refused.
    """

    class Meta:
        unknown = INCLUDE

    @validates_schema
    def reject_store_id(self, data, **kwargs):
        if "_id" in data:
            raise ValidationError("_id is assigned by the store.", field_name="_id")


class InsertOneResultSchema(Schema):
    acknowledged = fields.Boolean()
    inserted_id = fields.String(data_key="insertedId")


class UpdateResultSchema(Schema):
    acknowledged = fields.Boolean()
    matched_count = fields.Integer(data_key="matchedCount")
    modified_count = fields.Integer(data_key="modifiedCount")
    upserted_count = fields.Integer(data_key="upsertedCount")
    upserted_id = fields.String(data_key="upsertedId", allow_none=True)


class DeleteResultSchema(Schema):
    acknowledged = fields.Boolean()
    deleted_count = fields.Integer(data_key="deletedCount")
