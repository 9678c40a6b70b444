# catalog/serializers.py

"""
CATALOG COMMAND SERIALIZERS

Purpose:
- Validate operator payloads (JSON files) for the pricing and import commands.
- Render pricing results with Decimal values as strings.

These serializers do NOT touch the database.
"""

from rest_framework import serializers

from catalog.services.types import CartLine, ImportLine


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.CharField(required=True, allow_blank=False, max_length=64)
    quantity = serializers.IntegerField(required=True, min_value=1)

    def to_line(self) -> CartLine:
        data = self.validated_data
        return CartLine(product_id=data["product_id"].strip(), quantity=data["quantity"])


class ImportLineSerializer(serializers.Serializer):
    # trim_whitespace=False: product names are matched exactly as given
    name = serializers.CharField(required=True, allow_blank=False, max_length=255, trim_whitespace=False)
    categories = serializers.ListField(
        child=serializers.CharField(allow_blank=True, max_length=255),
        required=False,
        default=list,
    )
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    # signed delta; import_stock rejects lines that would leave stock below zero
    quantity = serializers.IntegerField()

    def validate_name(self, value: str):
        if not (value or "").strip():
            raise serializers.ValidationError("name cannot be blank")
        return value

    def to_line(self) -> ImportLine:
        data = self.validated_data
        return ImportLine(
            name=data["name"],
            categories=data.get("categories") or (),
            price=data["price"],
            quantity=data["quantity"],
        )


class CartDiscountResultSerializer(serializers.Serializer):
    total_before_discount = serializers.DecimalField(max_digits=20, decimal_places=4, read_only=True)
    total_discount = serializers.DecimalField(max_digits=20, decimal_places=4, read_only=True)
    final_price = serializers.DecimalField(max_digits=20, decimal_places=4, read_only=True)
    skipped_product_ids = serializers.SerializerMethodField(read_only=True)

    def get_skipped_product_ids(self, obj):
        return [str(pid) for pid in obj.skipped_product_ids]


def parse_lines(serializer_class, payload, *, empty_message: str):
    """
    Validate a JSON array of line objects; return domain lines in input order.
    Raises serializers.ValidationError (errors keyed by line index).
    """
    if not isinstance(payload, list):
        raise serializers.ValidationError("Payload must be a JSON array.")
    if not payload:
        raise serializers.ValidationError(empty_message)

    lines = []
    errors = {}
    for idx, item in enumerate(payload):
        ser = serializer_class(data=item)
        if ser.is_valid():
            lines.append(ser.to_line())
        else:
            errors[idx] = ser.errors

    if errors:
        raise serializers.ValidationError(errors)

    return lines
