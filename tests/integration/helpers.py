"""Sample corpus used by the integration tests.

Mirrors the layout of a real guide repository: an ``areas/<area>/`` tree,
a top-level README without front matter and cross-links between guides.
"""

from pathlib import Path

SAMPLE_GUIDES: dict[str, str] = {
    "README.md": "# AL Guides\n\nStart with the areas directory.\n",
    "areas/testing/test-cleanup.md": """---
title: Test Data Cleanup
description: Remove prefixed records after each test codeunit runs.
area: testing
difficulty: beginner
object_types: [Codeunit]
variable_types: [Record]
tags: [testing, cleanup]
---
# Test Data Cleanup

Delete every record whose key starts with the test prefix.

```al
procedure CleanupTestData()
var
    Customer: Record Customer;
begin
    Customer.SetFilter("No.", 'TEST-*');
    Customer.DeleteAll(true);
end;
```

## Related Topics

- [Test data prefixing](test-data-prefixing.md)
""",
    "areas/testing/test-data-prefixing.md": """---
title: Test Data Prefixing
description: Prefix generated records so cleanup can find them.
area: testing
difficulty: intermediate
object_types: [Codeunit, Table]
tags: [testing]
---
# Test Data Prefixing

Generate keys like `TEST-0001`.

## Related Topics

- [Cleanup](test-cleanup.md)
- [Webhook retry](../integration/webhook-retry.md)
""",
    "areas/integration/webhook-retry.md": """---
title: Webhook Retry with Backoff
description: Deliver outbound webhooks at least once with exponential backoff.
area: integration
difficulty: advanced
object_types: [Codeunit, Table]
variable_types: [HttpClient, JsonObject]
tags: [http, retry, webhooks]
---
# Webhook Retry with Backoff

```al
Delay := Power(2, Attempt) * 1000;
```

```
missing language tag
```

## Related Topics

- [Job queue sync](job-queue-sync.md)
""",
}


def write_sample_corpus(root: Path) -> Path:
    for relative, text in SAMPLE_GUIDES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root
