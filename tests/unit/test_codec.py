"""Unit tests for encoding/decoding."""

from __future__ import annotations

import math

import pytest

from avrodatum import (
    CodecConfig,
    DecodeError,
    EncodeError,
    FieldNotFoundError,
    MalformedError,
    MissingFieldError,
    PrimitiveKind,
    RecordSchema,
    TrailingDataError,
    TruncatedError,
    TypedRecord,
    TypedValue,
    WrongTypeError,
    build_record,
    decode,
    decode_to_dict,
    decode_with_remainder,
    encode,
    encode_datum,
    encoded_size,
    field_sizes,
    parse_schema,
)


class TestEncodeDecode:
    """Test basic encode/decode functionality."""

    def test_simple_record(self, rec_schema: RecordSchema) -> None:
        """Test the two-field record encodes to known bytes."""
        record = build_record(rec_schema, {"id": 1, "label": "a"})
        data = encode(rec_schema, record)

        # zig-zag(1) = 2, then length 1 as zig-zag 2, then 'a'
        assert data == b"\x02\x02\x61"

        decoded, remainder = decode_with_remainder(rec_schema, data)
        assert decoded.to_dict() == {"id": 1, "label": "a"}
        assert remainder == b""

    def test_schema_order_not_insertion_order(self, rec_schema: RecordSchema) -> None:
        """Test fields are written in declaration order."""
        record = build_record(rec_schema, {"label": "a", "id": 1})

        assert encode(rec_schema, record) == b"\x02\x02\x61"

    def test_all_kinds(self, sensor_schema: RecordSchema, sensor_values: dict[str, object]) -> None:
        """Test a record using every supported kind."""
        record = build_record(sensor_schema, sensor_values)
        data = encode(sensor_schema, record)

        decoded = decode(sensor_schema, data)
        assert decoded == record
        assert decoded.to_dict() == sensor_values

    def test_sensor_bytes(self, sensor_schema: RecordSchema) -> None:
        """Test exact wire bytes for each kind."""
        record = build_record(
            sensor_schema, {"sensor_id": -1, "timestamp_ms": 64, "value": 1.0, "unit": "m"}
        )

        assert encode(sensor_schema, record) == (
            b"\x01"  # int -1
            b"\x80\x01"  # long 64
            b"\x00\x00\x00\x00\x00\x00\xf0\x3f"  # double 1.0
            b"\x02m"  # string "m"
        )

    def test_special_doubles(self) -> None:
        """Test NaN and infinities survive a round trip."""
        schema = parse_schema(
            '{"type": "record", "name": "r", "fields": ['
            '{"name": "a", "type": "double"}, {"name": "b", "type": "double"}]}'
        )
        record = build_record(schema, {"a": float("nan"), "b": float("-inf")})

        decoded = decode(schema, encode(schema, record))
        assert math.isnan(decoded["a"].value)
        assert decoded["b"].value == -math.inf

    def test_empty_record(self) -> None:
        """Test a record with no fields encodes to nothing."""
        schema = parse_schema('{"type": "record", "name": "r", "fields": []}')

        assert encode(schema, build_record(schema, {})) == b""
        assert len(decode(schema, b"")) == 0

    def test_encode_datum(self, rec_schema: RecordSchema) -> None:
        """Test build-and-encode in one call."""
        assert encode_datum(rec_schema, {"id": 1, "label": "a"}) == b"\x02\x02\x61"

    def test_decode_to_dict(self, rec_schema: RecordSchema) -> None:
        """Test decode straight to plain values."""
        assert decode_to_dict(rec_schema, b"\x02\x02\x61") == {"id": 1, "label": "a"}

    def test_decode_memoryview(self, rec_schema: RecordSchema) -> None:
        """Test decoding from a buffer other than bytes."""
        assert decode(rec_schema, memoryview(b"\x02\x02\x61")).to_dict() == {"id": 1, "label": "a"}


class TestEncodeErrors:
    """Test encoding error handling."""

    def test_missing_field(self, rec_schema: RecordSchema) -> None:
        """Test a declared field without a value."""
        record = build_record(rec_schema, {"id": 1})

        with pytest.raises(MissingFieldError) as exc_info:
            encode(rec_schema, record)

        assert exc_info.value.missing == ("label",)
        assert isinstance(exc_info.value, EncodeError)

    def test_missing_fields_all_reported(self, sensor_schema: RecordSchema) -> None:
        """Test every absent field is named."""
        record = build_record(sensor_schema, {"value": 1.0})

        with pytest.raises(MissingFieldError) as exc_info:
            encode(sensor_schema, record)

        assert exc_info.value.missing == ("sensor_id", "timestamp_ms", "unit")

    def test_encode_datum_unknown_field(self, rec_schema: RecordSchema) -> None:
        """Test unknown keys fail before encoding."""
        with pytest.raises(FieldNotFoundError):
            encode_datum(rec_schema, {"id": 1, "label": "a", "extra": 0})

    def test_kind_mismatch(self, rec_schema: RecordSchema) -> None:
        """Test a record typed against a different schema."""
        other = parse_schema(
            '{"type": "record", "name": "rec", "fields": ['
            '{"name": "id", "type": "string"}, {"name": "label", "type": "string"}]}'
        )
        record = build_record(other, {"id": "1", "label": "a"})

        with pytest.raises(WrongTypeError, match="expected long, got string"):
            encode(rec_schema, record)

    def test_hand_built_value_out_of_range(self, sensor_schema: RecordSchema) -> None:
        """Test a TypedValue constructed without validation."""
        values = {
            "sensor_id": TypedValue(PrimitiveKind.INT, 2**40),
            "timestamp_ms": TypedValue(PrimitiveKind.LONG, 0),
            "value": TypedValue(PrimitiveKind.DOUBLE, 0.0),
            "unit": TypedValue(PrimitiveKind.STRING, ""),
        }

        with pytest.raises(WrongTypeError, match="sensor_id"):
            encode(sensor_schema, TypedRecord(sensor_schema, values))

    def test_max_encoded_bytes(self, rec_schema: RecordSchema) -> None:
        """Test the configured size limit."""
        record = build_record(rec_schema, {"id": 1, "label": "x" * 20})
        config = CodecConfig(max_encoded_bytes=8)

        with pytest.raises(EncodeError, match="exceeds max_encoded_bytes=8"):
            encode(rec_schema, record, config)

        assert len(encode(rec_schema, record, CodecConfig(max_encoded_bytes=22))) == 22


class TestDecodeErrors:
    """Test decoding error handling."""

    def test_truncated_data(self, rec_schema: RecordSchema) -> None:
        """Test data ending before the last field."""
        with pytest.raises(TruncatedError, match="label"):
            decode(rec_schema, b"\x02")

    def test_truncated_string_body(self, rec_schema: RecordSchema) -> None:
        """Test a string shorter than its length prefix."""
        with pytest.raises(TruncatedError, match="label"):
            decode(rec_schema, b"\x02\x06ab")

    def test_truncated_double(self, sensor_schema: RecordSchema) -> None:
        """Test a double with fewer than 8 bytes."""
        with pytest.raises(TruncatedError, match="value"):
            decode(sensor_schema, b"\x01\x02\x00\x00\x00")

    def test_empty_input(self, rec_schema: RecordSchema) -> None:
        """Test no data at all."""
        with pytest.raises(TruncatedError, match="id"):
            decode(rec_schema, b"")

    def test_overlong_varint(self, rec_schema: RecordSchema) -> None:
        """Test a long varint that never terminates within 10 bytes."""
        with pytest.raises(MalformedError, match="id"):
            decode(rec_schema, b"\xff" * 11)

    def test_int_overflow(self, sensor_schema: RecordSchema) -> None:
        """Test an int field carrying a value wider than 32 bits."""
        with pytest.raises(MalformedError, match="sensor_id"):
            decode(sensor_schema, b"\x80\x80\x80\x80\x10")

    def test_negative_length(self, rec_schema: RecordSchema) -> None:
        """Test a negative string length prefix."""
        with pytest.raises(MalformedError, match="Negative length"):
            decode(rec_schema, b"\x02\x01")

    def test_invalid_utf8(self, rec_schema: RecordSchema) -> None:
        """Test string bytes that are not UTF-8."""
        with pytest.raises(MalformedError, match="label"):
            decode(rec_schema, b"\x02\x02\xff")

    def test_errors_share_base(self, rec_schema: RecordSchema) -> None:
        """Test every decode failure is a DecodeError."""
        for data in (b"", b"\xff" * 11, b"\x02\x02a\x00"):
            with pytest.raises(DecodeError):
                decode(rec_schema, data)


class TestTrailingData:
    """Test the all-data-consumed policy."""

    def test_single_newline_tolerated(self, rec_schema: RecordSchema) -> None:
        """Test one trailing line feed is accepted."""
        assert decode(rec_schema, b"\x02\x02a\n").to_dict() == {"id": 1, "label": "a"}

    def test_newline_rejected_when_strict(self, rec_schema: RecordSchema) -> None:
        """Test the padding byte can be disallowed."""
        with pytest.raises(TrailingDataError):
            decode(rec_schema, b"\x02\x02a\n", tolerate_padding=False)

    @pytest.mark.parametrize("tail", [b"\x00", b" ", b"\n\n", b"\x00\n", b"\n\x00"])
    def test_other_trailing_bytes(self, rec_schema: RecordSchema, tail: bytes) -> None:
        """Test any other tail is rejected."""
        with pytest.raises(TrailingDataError) as exc_info:
            decode(rec_schema, b"\x02\x02a" + tail)

        assert exc_info.value.remaining == tail

    def test_remainder_returned_by_core_decoder(self, rec_schema: RecordSchema) -> None:
        """Test the byte-level decoder reports instead of rejecting."""
        record, remainder = decode_with_remainder(rec_schema, b"\x02\x02a\x00\x01")

        assert record.to_dict() == {"id": 1, "label": "a"}
        assert remainder == b"\x00\x01"

    def test_custom_padding_byte(self, rec_schema: RecordSchema) -> None:
        """Test a configured padding byte replaces the line feed."""
        config = CodecConfig(padding_byte=0x00)

        assert decode(rec_schema, b"\x02\x02a\x00", config=config)["id"].value == 1
        with pytest.raises(TrailingDataError):
            decode(rec_schema, b"\x02\x02a\n", config=config)


class TestCodecConfig:
    """Test configuration validation."""

    @pytest.mark.parametrize("padding_byte", [-1, 256, True])
    def test_invalid_padding_byte(self, padding_byte: int) -> None:
        """Test padding byte must be a single byte value."""
        with pytest.raises(ValueError, match="padding_byte"):
            CodecConfig(padding_byte=padding_byte)

    def test_invalid_max_bytes(self) -> None:
        """Test size limit must be positive."""
        with pytest.raises(ValueError, match="max_encoded_bytes"):
            CodecConfig(max_encoded_bytes=0)


class TestSizeCalculation:
    """Test size calculation utilities."""

    def test_field_sizes(self, rec_schema: RecordSchema) -> None:
        """Test per-field sizes."""
        record = build_record(rec_schema, {"id": 1, "label": "a"})

        assert field_sizes(rec_schema, record) == {"id": 1, "label": 2}

    def test_encoded_size_matches_encode(
        self, sensor_schema: RecordSchema, sensor_values: dict[str, object]
    ) -> None:
        """Test computed size equals actual encoded length."""
        record = build_record(sensor_schema, sensor_values)

        assert encoded_size(sensor_schema, record) == len(encode(sensor_schema, record))

    def test_size_of_partial_record(self, rec_schema: RecordSchema) -> None:
        """Test sizing requires every declared field."""
        with pytest.raises(MissingFieldError):
            encoded_size(rec_schema, build_record(rec_schema, {"id": 1}))

    def test_size_of_record_from_other_schema(self, rec_schema: RecordSchema) -> None:
        """Test sizing checks fields against the schema argument, not the record's."""
        other = parse_schema(
            '{"type": "record", "name": "other", "fields": [{"name": "id", "type": "long"}]}'
        )
        record = build_record(other, {"id": 1})

        with pytest.raises(MissingFieldError) as exc_info:
            encoded_size(rec_schema, record)

        assert exc_info.value.missing == ("label",)

    def test_size_rejects_kind_mismatch(self, rec_schema: RecordSchema) -> None:
        """Test sizing rejects a value typed for a different kind, like encode does."""
        other = parse_schema(
            '{"type": "record", "name": "other", "fields": ['
            '{"name": "id", "type": "string"}, {"name": "label", "type": "string"}]}'
        )
        record = build_record(other, {"id": "1", "label": "a"})

        with pytest.raises(WrongTypeError, match="expected long, got string"):
            encoded_size(rec_schema, record)
        with pytest.raises(WrongTypeError, match="expected long, got string"):
            encode(rec_schema, record)
