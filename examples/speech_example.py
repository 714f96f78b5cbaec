"""Example: Generate speech with the OpenAI helper and play it."""

from openai_helper import HelperClient, setup_logging


def main():
    """Synthesize a short sentence from environment configuration."""
    setup_logging("INFO")

    # OPENAI_API_KEY must be set; OPENAI_AUDIO_PATH chooses the output directory
    client = HelperClient.from_env()

    print("Generating speech...")
    path = client.generate_speech("Hello from the OpenAI helper.", "hello.mp3", autoplay=True)

    if path is not None:
        print(f"\nSaved to: {path}")


if __name__ == "__main__":
    main()
