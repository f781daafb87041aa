"""
Customer-facing copy, keyed by message kind then language tag.
Placeholders: {brand}, {email}, {order_id}. English is the fallback for any
kind missing a translation.
"""

TEMPLATES = {
    "track_order": {
        "en": "📦 To track your order, open the tracking link in your shipping SMS/email, or share your Order ID here and we'll check the status for you.",
        "hi-Latn": "📦 Order track karne ke liye shipping SMS/email me diya tracking link dekhein, ya apna Order ID yahan share karein, hum status check kar denge.",
        "hi": "📦 ऑर्डर ट्रैक करने के लिए shipping SMS/email में दिया tracking link देखें, या अपना Order ID यहाँ भेजें, हम स्टेटस चेक कर देंगे।",
    },
    "replace": {
        "en": "🔄 For replacement/exchange, please share your Order ID + issue details (photo/video), or email **{email}**. We'll create the request as per policy.",
        "hi-Latn": "🔄 Replacement/Exchange ke liye Order ID + issue details (photo/video) share karein, ya **{email}** par mail karein. Hum policy ke hisaab se request bana denge.",
        "hi": "🔄 Replacement/Exchange के लिए कृपया अपना Order ID और issue details (फोटो/वीडियो) साझा करें, या **{email}** पर mail करें। हम पॉलिसी अनुसार रिक्वेस्ट बनाएँगे।",
    },
    "refund": {
        "en": "💸 Refunds are processed to the original payment method once the return is approved. Please share your Order ID and reason, or email **{email}**.",
        "hi-Latn": "💸 Return approve hone ke baad refund original payment method me aata hai. Kripya apna Order ID aur reason share karein, ya **{email}** par mail karein.",
        "hi": "💸 रिटर्न अप्रूव होने के बाद रिफंड आपके original payment method में आता है। कृपया अपना Order ID और कारण बताएं, या **{email}** पर mail करें।",
    },
    "address_change": {
        "en": "🏠 Address changes are possible before dispatch. Please send your Order ID and the new address with pincode, or email **{email}**.",
        "hi-Latn": "🏠 Dispatch se pehle address change ho sakta hai. Apna Order ID aur naya address (pincode ke saath) bhejiye, ya **{email}** par mail karein.",
        "hi": "🏠 डिस्पैच से पहले पता बदला जा सकता है। अपना Order ID और नया पता (पिनकोड सहित) भेजें, या **{email}** पर mail करें।",
    },
    "order_id": {
        "en": "✅ Thanks! We've noted Order ID **{order_id}**. Our team will check it and update you shortly. For anything urgent, email **{email}**.",
        "hi-Latn": "✅ Dhanyavaad! Order ID **{order_id}** note kar liya hai. Hamari team check karke jaldi update degi. Urgent ho to **{email}** par mail karein.",
        "hi": "✅ धन्यवाद! Order ID **{order_id}** नोट कर लिया है। हमारी टीम जाँच कर जल्द अपडेट देगी। ज़रूरी हो तो **{email}** पर mail करें।",
    },
    "greeting": {
        "en": "🙏 Hi! Welcome to {brand}. Ask me about our products, prices, or your order.",
        "hi-Latn": "🙏 Namaste! {brand} me aapka swagat hai. Products, price ya apne order ke baare me poochiye.",
        "hi": "🙏 नमस्ते! {brand} में आपका स्वागत है। प्रोडक्ट्स, कीमत या अपने ऑर्डर के बारे में पूछिए।",
    },
    "scope": {
        "en": "This chat is only for {brand} products & orders. Please ask about our products, orders, or delivery.",
        "hi-Latn": "Ye chat sirf {brand} ke products aur orders ke liye hai. Kripya products, orders ya delivery se jude prashn poochiye.",
        "hi": "यह चैट केवल {brand} के products व orders के लिए है। कृपया हमारे products, orders या delivery से जुड़े सवाल पूछें।",
    },
    "clarify": {
        "en": "Product not found. Please specify the product or stone name (e.g. Rose Quartz, Citrine, Tiger Eye).",
        "hi-Latn": "Product nahi mila. Kripya product ya stone ka naam batayein (jaise Rose Quartz, Citrine, Tiger Eye).",
        "hi": "प्रोडक्ट नहीं मिला। कृपया प्रोडक्ट या स्टोन का नाम बताएं (जैसे Rose Quartz, Citrine, Tiger Eye)।",
    },
    "empty": {
        "en": "Please type your question.",
        "hi-Latn": "Kripya apna sawal likhiye.",
        "hi": "कृपया अपना सवाल लिखें।",
    },
    "error": {
        "en": "Sorry, something went wrong. Please try again.",
    },
}

# Product answer labels
PRODUCT_LABELS = {
    "en": {"from": "from", "buy": "Buy/see", "out_of_stock": "Currently out of stock."},
    "hi-Latn": {"from": "shuruaat", "buy": "Dekhein/Khareedein", "out_of_stock": "Abhi stock me nahi hai."},
    "hi": {"from": "शुरुआत", "buy": "देखें/खरीदें", "out_of_stock": "अभी स्टॉक में नहीं है।"},
}

LANGUAGE_NAMES = {"en": "English", "hi-Latn": "Hinglish (Hindi in Latin script)", "hi": "Hindi (Devanagari)"}

SUGGESTIONS = {
    "en": {
        "default": ["Track my order", "Exchange / Replace", "Refund policy"],
        "product": ["Price?", "Similar products", "Track my order"],
        "clarify": ["Rose Quartz", "Citrine", "Tiger Eye"],
        "order": ["Change address", "Refund policy"],
    },
    "hi-Latn": {
        "default": ["Order track karo", "Exchange / Replace", "Refund kaise milega"],
        "product": ["Price kya hai?", "Aur products", "Order track karo"],
        "clarify": ["Rose Quartz", "Citrine", "Tiger Eye"],
        "order": ["Address badlo", "Refund kaise milega"],
    },
    "hi": {
        "default": ["ऑर्डर ट्रैक करें", "एक्सचेंज / रिप्लेस", "रिफंड पॉलिसी"],
        "product": ["कीमत?", "और प्रोडक्ट्स", "ऑर्डर ट्रैक करें"],
        "clarify": ["Rose Quartz", "Citrine", "Tiger Eye"],
    },
}
