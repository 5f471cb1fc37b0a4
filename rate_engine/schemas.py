"""Marshmallow schemas for health responses and CLI output."""

from __future__ import annotations

from marshmallow import Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class HealthRatesSchema(Schema):
    status = fields.String(required=True)
    cached_pairs = fields.Integer(required=True)
    ttl_seconds = fields.Integer(required=True)
    providers = fields.List(fields.String(), required=True)
    matrix_currencies = fields.List(fields.String(), required=True)
    last_bulk_update = fields.String(allow_none=True)


class MoneySchema(Schema):
    amount = fields.Float(required=True)
    currency = fields.String(required=True)


class ConversionResultSchema(Schema):
    original_amount = fields.Nested(MoneySchema, data_key="originalAmount")
    converted_amount = fields.Nested(MoneySchema, data_key="convertedAmount")
    exchange_rate = fields.Float(data_key="exchangeRate")
    timestamp = fields.DateTime(format="iso")
    provider = fields.String()


class RateEntrySchema(Schema):
    base_currency = fields.String(data_key="baseCurrency")
    target_currency = fields.String(data_key="targetCurrency")
    rate = fields.Float()
    timestamp = fields.DateTime(format="iso")
    provider = fields.String()
    as_of = fields.DateTime(format="iso", allow_none=True, data_key="asOf")


class SweepSummarySchema(Schema):
    started_at = fields.DateTime(format="iso", data_key="startedAt")
    attempted = fields.Integer()
    succeeded = fields.List(fields.List(fields.String()))
    failed = fields.List(fields.List(fields.String()))
