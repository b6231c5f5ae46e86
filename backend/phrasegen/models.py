from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Text
from .db import Base


class VocabularyEntry(Base):
	# Owned by the vocabulary CRUD layer; the generation pipeline only reads it
	__tablename__ = "vocabulary_entries"
	id = Column(String(36), primary_key=True)
	username = Column(String(255), nullable=False, index=True)
	chinese_character = Column(Text, nullable=False)
	pinyin = Column(String(255), nullable=False, default="")
	english_meaning = Column(Text, nullable=True)
	chapter = Column(Integer, nullable=False, index=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class PreGeneratedSentence(Base):
	__tablename__ = "pre_generated_sentences"
	id = Column(String(36), primary_key=True)
	vocab_group_id = Column(Integer, nullable=False, index=True)
	chinese_text = Column(Text, nullable=False)
	pinyin = Column(Text, nullable=False)
	used_characters = Column(Text, nullable=False)  # JSON array of strings
	generation_timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)
