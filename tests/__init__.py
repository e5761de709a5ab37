"""
Policy Topics - Test Suite

Test modules organized by functionality:
- unit/preprocessing/ - Tokenizer, stop words, document records
- unit/features/ - Vocabulary, Gibbs LDA, results, sentiment, frequency, tracking
- unit/ - Configuration, pipeline and CLI
"""
