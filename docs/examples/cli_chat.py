import asyncio
import logging

from dotenv import load_dotenv

from gpt_agent_lib import (
    AssistantMessage,
    Conversation,
    GPTModelService,
    GPTModelServiceConfig,
    MessageThought,
    StreamThought,
    SystemMessage,
    UserMessage,
    setup_logging,
)

# Load environment variables
load_dotenv()


async def main() -> None:
    """
    Main function to run a streaming CLI chat.
    """
    print("Welcome to the CLI Chat!")
    setup_logging(logging.WARNING)

    config = GPTModelServiceConfig.from_env()
    if not config.api_key:
        print("Error: OPENAI_API_KEY not found in environment variables.")
        return

    service = GPTModelService.from_config(config)
    conversation = Conversation(messages=[SystemMessage(content="You are a helpful assistant.")])
    print(f"Using {config.model_name}.")

    print("\nStart chatting! Type 'exit' or 'quit' to stop, 'reset' to start over.")
    while True:
        user_input = input("\nYou: ").strip()
        if user_input.lower() in ["exit", "quit"]:
            print("Goodbye!")
            break

        if user_input.lower() == "reset":
            conversation.reset([SystemMessage(content="You are a helpful assistant.")])
            continue

        if not user_input:
            continue

        conversation.append_message(UserMessage(content=user_input, name="You"))
        try:
            thought = await service.chat_completion(conversation.messages, stream=True)
            print("Assistant: ", end="", flush=True)
            if isinstance(thought, StreamThought):
                parts = []
                async for text in thought.stream:
                    print(text, end="", flush=True)
                    parts.append(text)
                answer = "".join(parts)
            elif isinstance(thought, MessageThought):
                answer = thought.text
                print(answer, end="")
            else:
                answer = ""
            print()
            conversation.append_message(AssistantMessage(content=answer))

        except Exception as e:
            print(f"An error occurred: {e}")

    print(conversation.to_json_string())


if __name__ == "__main__":
    asyncio.run(main())
