"""Example usage of the jsoncompare comparison engine."""

import json
from jsoncompare import (
    ComparisonSession,
    MalformedJsonError,
    compare_json,
    format_json,
    validate_json,
)

# Response from the legacy service
old_response = """
{
  "id": "INV-001",
  "total": 100.0,
  "status": "PAID",
  "updatedAt": "2025-02-02T11:00:00Z",
  "metadata": {"traceId": "abc123"},
  "lineItems": [
    {"sku": "WIDGET-001", "quantity": 5, "updatedAt": "2025-02-02T11:00:00Z"},
    {"sku": "GADGET-002", "quantity": 2}
  ]
}
"""

# Response from the new service
new_response = """
{
  "id": "INV-001",
  "total": 100,
  "status": "paid",
  "updatedAt": "2025-02-03T09:12:44Z",
  "metadata": {"traceId": "xyz789", "region": "eu"},
  "lineItems": [
    {"sku": "WIDGET-001", "quantity": 4, "updatedAt": "2025-02-03T09:12:44Z"}
  ]
}
"""


def main():
    print("=" * 60)
    print("jsoncompare - Example")
    print("=" * 60)

    result = compare_json(old_response, new_response, ["updatedAt", "metadata"])

    print(f"\nEqual: {result.is_equal}")
    print(f"Excluded: {', '.join(result.excluded_fields)}")

    if result.differences:
        print(f"\nDifferences:")
        for diff in result.differences:
            print(f"  - {diff}")

    print("\n" + "-" * 60)
    print("Full JSON Report:")
    print(json.dumps(result.to_dict(), indent=2))


def example_with_invalid_input():
    """Example that demonstrates validation of a broken document."""
    print("\n" + "=" * 60)
    print("Example with Invalid Input")
    print("=" * 60)

    broken = '{\n  "id": "INV-001",\n  "total": ,\n}'

    validation = validate_json(broken)
    print(f"\nValid: {validation.is_valid}")
    print(f"{validation.location}: {validation.error}")

    try:
        compare_json(broken, new_response)
    except MalformedJsonError as e:
        print(f"\nCompare refused: {e}")


def example_with_session():
    """Example driving a session with a saved template."""
    print("\n" + "=" * 60)
    print("Example with Session and Template")
    print("=" * 60)

    session = ComparisonSession()
    session.set_left(old_response)
    session.set_right(new_response)

    for field in ("updatedAt", "metadata", "status"):
        session.add_excluded_field(field)
    template = session.save_template("invoice noise")
    print(f"\nSaved template: {template.describe()}")

    session.compare()
    print()
    print(session.report())

    print("\nFormatted:")
    print(format_json('{"sku":"WIDGET-001","quantity":5}'))


if __name__ == "__main__":
    main()
    example_with_invalid_input()
    example_with_session()
