"""Example: Request strict structured output about a local image."""

import sys

from openai_helper import ClientConfig, HelperClient, NotificationMethod


def main():
    """Describe an image passed on the command line."""
    if len(sys.argv) < 2:
        print("Usage: python structured_example.py <image-file>")
        sys.exit(1)

    # Configure the client explicitly instead of from the environment
    config = ClientConfig(
        api_key="sk-your-key",
        model="gpt-4o",
        notification_method=NotificationMethod.CONSOLE,
    )
    client = HelperClient(config)

    messages = [
        {"role": "system", "content": "You describe images precisely."},
        {"role": "user", "content": "Describe this image.", "image_files": [sys.argv[1]]},
    ]
    fields = {
        "subject": {"type": "string", "description": "Main subject of the image"},
        "object_count": {"type": "integer", "description": "Number of distinct objects"},
        "outdoors": {"type": "boolean", "description": "Whether the scene is outdoors"},
    }

    print("Sending structured request...")
    result = client.strict_structured_request(messages, fields)

    if result is not None:
        for key, value in result.items():
            print(f"{key}: {value}")


if __name__ == "__main__":
    main()
