"""
jsonscrub demonstration script.
"""

import jsonscrub


def main():
    print("jsonscrub - Almost-JSON Sanitizer Demo")
    print("=" * 40)

    examples = [
        # Already valid
        ('{"name": "John", "age": 30}', "Valid JSON passes through"),
        # Markdown fence from an LLM response
        ('```json\n{"items": [1, 2, 3]}\n```', "Markdown code fence"),
        # Comments and trailing commas
        (
            """
        {
            // service settings
            "host": "http://localhost:8080",
            "ports": [80, 443 /* tls */,],
        }
        """,
            "Comments and trailing commas",
        ),
        # Double-encoded payload
        ('"{\\"user\\": \\"ada\\", \\"admin\\": true}"', "Double-encoded JSON"),
        # Raw newline inside a string
        ('{"note": "line one\nline two"}', "Control characters in strings"),
        # JavaScript object literal
        ("{name: 'John', tags: ['a' 'b']}", "Unquoted keys and single quotes"),
    ]

    for i, (json_str, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {json_str.strip()}")

        try:
            result = jsonscrub.sanitize(json_str)
            print(f"Output: {result.parsed}")
            print(f"Clean:  {result.cleaned_string}")
            print(f"Stage:  {result.stage.value}")
        except jsonscrub.jsonscrubError as e:
            print(f"Error:  {e}")

    # Smart repair
    print(f"\n{len(examples) + 1}. Smart repair")
    broken = '{"items": [1, 2, "status": ok'
    print(f"Input:  {broken}")
    try:
        result = jsonscrub.repair(broken)
        print(f"Output: {result.parsed}")
        print(f"Repaired with: {result.repair_kind.value}")
    except jsonscrub.jsonscrubError as e:
        print(f"Error:  {e}")

    # Batch processing
    print(f"\n{len(examples) + 2}. Batch processing")
    processor = jsonscrub.RecordProcessor(
        jsonscrub.ProcessorOptions(output_mode="both", error_handling="continue")
    )
    records = [{"json": "[1, 2,]"}, {"json": '{"broken": }'}]
    for output in processor.process(records):
        print(f"Record: {output}")


if __name__ == "__main__":
    main()
