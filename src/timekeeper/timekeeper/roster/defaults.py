"""Roster used when neither local storage nor the shared document has one."""

from __future__ import annotations

from .model import Employee

DEFAULT_EMPLOYEES: tuple[Employee, ...] = (
    Employee(name="مينا القمص ويصا", job="Construction Manager B", department="Construction"),
    Employee(name="جورج عياد تناغو سوس", job="Site Team Leader", department="Construction"),
    Employee(name="روبير ثروت عبدالملاك", job="Site Team Leader", department="Construction"),
    Employee(name="مينا رضا اندراوس يوسف", job="Senior Site Engineer", department="Construction"),
    Employee(name="بيشوي بشري عدلي اسعد عطا", job="Senior Site Engineer", department="Construction"),
    Employee(name="احمد ايمن محمد احمد إبراهيم", job="Senior Site Engineer", department="Construction"),
    Employee(name="محمد عبدالحميد سعد سالم", job="Site Engineer", department="Construction"),
    Employee(name="محمود فرج مصطفى ابوالخير", job="Site Engineer", department="Construction"),
    Employee(name="علي سلامة علي محمد", job="Foreman Supervisor", department="Construction"),
    Employee(name="ماهر عزيز ميخائيل", job="Senior Foreman", department="Construction"),
    Employee(name="شنودة وجيه مسعود وهبه", job="Foreman", department="Construction"),
    Employee(name="وجدى وديع شفيق بسطاروس", job="Foreman", department="Construction"),
    Employee(name="رضا اسحق عزيز ميخائيل", job="Foreman Supervisor", department="Construction"),
    Employee(name="اميل فهمى عبدالنور عبدالمسيح", job="QC Manager A", department="Quality Control"),
    Employee(name="مصطفي عزت محمود محمد", job="QC Manager B", department="Quality Control"),
    Employee(name="فادي موريس بولس عبدالله", job="QC Manager", department="Quality Control"),
    Employee(name="يحى زكريا مصطفى", job="QC Team Leader", department="Quality Control"),
    Employee(name="طارق عطيه الحبشى عبدالمجيد", job="QC Team Leader", department="Quality Control"),
    Employee(name="مصطفى محمد عبدالغنى مصطفي حلاوة", job="Senior QC Engineer", department="Quality Control"),
    Employee(name="فادي سامح بشري", job="Senior QC Engineer", department="Quality Control"),
    Employee(name="وليد مكرم  احمد محمد منصور", job="Senior QC Engineer", department="Quality Control"),
    Employee(name="محمود مصطفى عبدالله ابراهيم", job="QC Engineer", department="Quality Control"),
    Employee(name="مريم نظمى انيس", job="Senior Document Controller", department="Quality Control"),
    Employee(name="احمد محمد عبدالحميد السيد خضر", job="Document Controller", department="Quality Control"),
    Employee(name="عبدالواحد احمد عبدالواحد مرسى", job="Surveying Manager", department="Surveying"),
    Employee(name="فتحى سعيد فتحى السيد", job="Surveying Engineer", department="Surveying"),
    Employee(name="ذكريا فوزى توفيق", job="Chief Surveyor", department="Surveying"),
    Employee(name="أسامة مشرف عبدالوكيل مشرف", job="Design Manager", department="Technical office"),
    Employee(name="مينا يوسف جرجس منسي", job="Technical Office Chief Engineer", department="Technical office"),
    Employee(name="سحر اشرف محمد عبدالرحمن", job="QC Manager", department="Technical office"),
    Employee(name="ابانوب حسام حليم غالي", job="Senior Technical Office Engineer", department="Technical office"),
    Employee(name="باسم ايمن قدري زيدان", job="Technical Office Engineer", department="Technical office"),
    Employee(name="ريمون مكرم حليم حنا", job="Technical Office Engineer", department="Technical office"),
    Employee(name="ايناس مصطفي مبارك محمد", job="Senior Methods Engineer", department="Technical office"),
    Employee(name="وائل محمد محمد محمد الحديدى", job="HSE Manager B", department="HSE"),
    Employee(name="فيليب فوزى فهيم سمعان", job="HSE Manager B", department="HSE"),
    Employee(name="مراد جرجس سعد واصف", job="HSE Manager C", department="HSE"),
    Employee(name="محمد فكري محمد احمد", job="HSE Supervisor", department="HSE"),
    Employee(name="محمد مجدى  محمد", job="Senior HSE Supervisor", department="HSE"),
    Employee(name="اشرف مبروك على حسن شرف الدين", job="HSE Supervisor", department="HSE"),
    Employee(name="احمد جمال محمد حسن", job="HSE Supervisor", department="HSE"),
    Employee(name="سيد محمود علي عيسسي", job="Nurse", department="HSE"),
    Employee(name="محمد فتحي محمد علي", job="Senior Accountant", department="Finance"),
    Employee(name="مرقس ميلاد توفيق خله", job="Planning Manager", department="planning"),
    Employee(name="ماريا رجائي غطاس حنين", job="Planning Team Leader", department="planning"),
    Employee(name="معتز محمد حسين حسن", job="IT Senior Operations Engineer", department="IT"),
    Employee(name="احمد عبدالرؤوف عبدالواحد", job="Quantity Surveying manager", department="Q S"),
    Employee(name="احمد اسامه السيد حندوسه", job="Technichal Office Engineer", department="Q S"),
    Employee(name="كيرلس جمال", job="Draftman", department="Q S"),
    Employee(name="الاء محمد عبدالحميد عبدالقادر", job="Project Coordinator Team Leader", department="Project coardinator"),
    Employee(name="سهيله علاء عبدالعزيز عبدالفتاح", job="Project Coordinator", department="Project coardinator"),
    Employee(name="كيرلس رفعت ونيس منصور", job="Cost Control Engineer", department="Project coardinator"),
    Employee(name="ابراهيم احمد الطيب محمد", job="OED- Maintenance Manager A", department="Equipment"),
    Employee(name="Mourat", job="Track Manager", department="Track"),
    Employee(name="محمود حامد محمود خلف", job="Site Engineer", department="Track"),
    Employee(name="كيرلس عزت سمير لمعى", job="Site Engineer", department="Track"),
    Employee(name="احمد نزيه محمد النادى", job="Contracts & Claims Manager B", department="Contract"),
    Employee(name="دنيا مصطفى عبدالحكم محمد الدوي", job="Contracts Administrator", department="Contract"),
    Employee(name="محمد عبدالمجيد مجد عبدالفتاح", job="Contracts Administrator", department="Contract"),
    Employee(name="ستيفن أسامة فالروق عزمي", job="Junior Contracts Administrator", department="Contract"),
    Employee(name="مايكل عصام شحاته", job="Security Manager", department="Security"),
    Employee(name="مودى منير فخرى عوض", job="Administrative Team Leader", department="Admin"),
    Employee(name="مجدى ايوب عبيد جاد", job="Senior Administrative Officer", department="Admin"),
    Employee(name="ممدوح متي ثابت متي", job="Tea Boy", department="Admin"),
    Employee(name="مارى جرجس فرويز", job="Tea Boy", department="Admin"),
    Employee(name="وسام ناجى هنرى ميخائيل", job="HR Manager", department="Human Resources"),
    Employee(name="ايرينى رمسيس ناشد رزق الله", job="Senior HR coordinator", department="Human Resources"),
    Employee(name="ايهاب محفوظ فهمي عبدالملك", job="HR Assistant", department="Human Resources"),
    Employee(name="سامح رفعت جرس جرجس", job="HR Assistant", department="Human Resources"),
)
