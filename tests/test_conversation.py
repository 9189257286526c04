from neura_client.conversation import Conversation, MessageType


def test_messages_keep_insertion_order() -> None:
    conversation = Conversation()

    question = conversation.add_question("hello")
    answer = conversation.add_answer("hi")

    assert list(conversation) == [question, answer]
    assert question.type is MessageType.QUESTION
    assert answer.type is MessageType.ANSWER
    assert question.id < answer.id


def test_reset_clears_and_ids_stay_unique() -> None:
    conversation = Conversation()
    first = conversation.add_question("one")

    conversation.reset()
    second = conversation.add_question("two")

    assert len(conversation) == 1
    assert second.id != first.id


def test_last_answer() -> None:
    conversation = Conversation()
    assert conversation.last_answer() is None

    conversation.add_question("q1")
    answer = conversation.add_answer("a1")
    conversation.add_question("q2")

    assert conversation.last_answer() == answer
